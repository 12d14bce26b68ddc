from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Card RPS server is running'})


@main.route('/api/lobbies')
def list_lobbies():
    """Same summaries the lobbies_update broadcast carries."""
    return jsonify(current_app.extensions['cardrps'].lobby_summaries())
