import logging

from storyloom.player import GameState, Player

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Owns one Player per session id. Sessions appear on first use."""
    def __init__(self, start_location_factory, skip_intro=False):
        self.start_location_factory = start_location_factory
        self.skip_intro = skip_intro
        self.players = {}

    def get(self, session_id):
        return self.players.get(session_id)

    def get_or_create(self, session_id):
        player = self.players.get(session_id)
        if player is None:
            start = self.start_location_factory()
            start.visited = True
            player = Player(start, session_id)
            if self.skip_intro:
                player.game_state = GameState.PLAYING
            self.players[session_id] = player
            logger.info("Created session %s at %s", session_id, start.name)
        return player

    def remove(self, session_id):
        if self.players.pop(session_id, None) is not None:
            logger.info("Cleaned up session %s", session_id)
            return True
        return False

    def session_ids(self):
        return list(self.players)

    def __contains__(self, session_id):
        return session_id in self.players

    def __len__(self):
        return len(self.players)
