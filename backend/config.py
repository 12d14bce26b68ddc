import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    # Socket.IO namespace the game events are bound to
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Comma separated list, '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Hand size; the deck holds twice as many cards
    CARDS_PER_PLAYER = int(os.environ.get('CARDS_PER_PLAYER', '15'))
    # Optional: pass the turn after this many seconds without a play. 0 disables.
    TURN_TIMEOUT_SEC = int(os.environ.get('TURN_TIMEOUT_SEC', '0'))
