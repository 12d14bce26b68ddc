from typing import Set, Tuple

from cardrps import socketio


_scheduled_turn_keys: Set[Tuple[str, int]] = set()


def schedule_turn_timer(app, lobby_name: str, turn_seq: int) -> None:
    """Schedule a turn timeout for the given lobby turn.

    - No-ops when TURN_TIMEOUT_SEC is 0 (the default) or in TESTING mode
      unless ENABLE_TIMER_IN_TESTS is set
    - Ensures a single timer per (lobby, turn)
    - On expiry the coordinator passes the turn if nobody has played since
    """
    try:
        duration = int(app.config.get('TURN_TIMEOUT_SEC', 0))
    except (TypeError, ValueError):
        duration = 0
    if duration <= 0:
        return
    if app.config.get('TESTING') and not app.config.get('ENABLE_TIMER_IN_TESTS'):
        return

    key = (lobby_name, turn_seq)
    if key in _scheduled_turn_keys:
        app.logger.info(f"[timer-skip] lobby={lobby_name} turn={turn_seq} already scheduled")
        return
    _scheduled_turn_keys.add(key)
    app.logger.info(f"[timer-set] lobby={lobby_name} turn={turn_seq} duration={duration}s")

    def _worker(name: str, seq: int, delay: int):
        socketio.sleep(delay)
        _scheduled_turn_keys.discard((name, seq))
        with app.app_context():
            coordinator = app.extensions.get('cardrps')
            if coordinator is None:
                return
            coordinator.expire_turn(name, seq)

    socketio.start_background_task(_worker, lobby_name, turn_seq, duration)
