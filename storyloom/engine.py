import logging
import threading

from storyloom.context import ContextTracker
from storyloom.dispatcher import CommandContext, CommandDispatcher, CustomCommand
from storyloom.formatting import describe_location
from storyloom.handlers import build_default_handlers
from storyloom.parser import CommandParser
from storyloom.player import GameState
from storyloom.resolver import ObjectResolver
from storyloom.responses import ResponseProvider
from storyloom.session import SessionRegistry
from storyloom.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

YES_ANSWERS = {'yes', 'y', 'yeah', 'yep', 'sure'}
NO_ANSWERS = {'no', 'n', 'nah', 'nope', 'no thanks'}

INTRO_TEXT_KEYS = {
    'question': 'have_you_played',
    'new_player': 'new_player_intro',
    'experienced_player': 'experienced_player_intro',
    'restart': 'restart_message',
}


class IntroResult:
    def __init__(self, message, transition_to_playing):
        self.message = message
        self.transition_to_playing = transition_to_playing

    @classmethod
    def playing(cls, message):
        return cls(message, True)

    @classmethod
    def waiting(cls, message):
        return cls(message, False)


class GameEngine:
    """
    The session state machine. Every call to ``process_command`` takes one
    line of player text for one session and returns a JSON-ready dict.

    While a session sits in a prompt state (intro question, quit/restart
    confirmation, code entry) its input answers the prompt and never
    reaches ordinary command handling.
    """
    def __init__(self, game_map, responses=None, skip_intro=False, intro_handler=None):
        self.game_map = game_map
        if responses is None:
            overrides = dict(game_map.response_overrides)
            for intro_key, text_key in INTRO_TEXT_KEYS.items():
                if game_map.intro.get(intro_key):
                    overrides[text_key] = game_map.intro[intro_key]
            responses = ResponseProvider(overrides)
        self.responses = responses
        self.intro_handler = intro_handler

        self.vocabulary = Vocabulary()
        self.context = ContextTracker()
        self.parser = CommandParser(self.vocabulary, self.context)
        self.resolver = ObjectResolver(self.context)
        self.dispatcher = CommandDispatcher(self.vocabulary)
        for handler in build_default_handlers(self.resolver, self.context, self.responses, game_map):
            self.dispatcher.register_builtin(handler)

        self.sessions = SessionRegistry(lambda: self.game_map.starting_location, skip_intro)
        self._lock = threading.RLock()
        self._boldable = None

    # ==========================================
    # PUBLIC API
    # ==========================================
    def register_command(self, verb, func, aliases=()):
        """Adds ``func(player, command, context)`` in front of the built-in handler for ``verb``."""
        handler = CustomCommand(verb, func, self.command_context, aliases)
        self.dispatcher.register_override(verb, handler, aliases)
        return handler

    def command_context(self, player):
        return CommandContext(player, self.resolver, self.responses, self.game_map)

    def get_player(self, session_id):
        return self.sessions.get(session_id)

    def process_command(self, session_id, text):
        with self._lock:
            player = self.sessions.get_or_create(session_id)
            self._boldable = None
            kind = "response"
            try:
                message, kind = self._route(player, text or "")
            except Exception:
                logger.exception("Command %r failed for session %s", text, session_id)
                message = self.responses.text('internal_error')
            return {
                "type": kind,
                "message": message,
                "boldable_text": self._boldable,
                "game_state": player.game_state,
                "valid_directions": player.current_location.available_directions(),
            }

    def cleanup_session(self, session_id):
        with self._lock:
            self.sessions.remove(session_id)
            self.parser.clear_context(session_id)

    def reset_game_state(self, session_id):
        """Puts the shared world and this session's player back at the start."""
        with self._lock:
            self.game_map.reset_map()
            start = self.game_map.starting_location
            start.visited = True
            player = self.sessions.get_or_create(session_id)
            player.reset(start)
            self.parser.clear_context(session_id)
            return player

    # ==========================================
    # STATE MACHINE
    # ==========================================
    def _route(self, player, text):
        state = player.game_state
        if state == GameState.WAITING_FOR_START_ANSWER:
            return self._start_answer(player, text), "response"
        if state == GameState.WAITING_FOR_RESTART_CONFIRMATION:
            return self._restart_answer(player, text), "response"
        if state == GameState.WAITING_FOR_QUIT_CONFIRMATION:
            return self._quit_answer(player, text)
        if state in (GameState.WAITING_FOR_UNLOCK_CODE, GameState.WAITING_FOR_OPEN_CODE):
            return self._code_answer(player, text), "response"
        return self._play(player, text), "response"

    def _look_here(self, player):
        location = player.current_location
        self._boldable = location.get_long_description()
        return describe_location(location)

    def _start_answer(self, player, text):
        if self.intro_handler is not None:
            result = self.intro_handler(player, text, self.game_map)
            if result.transition_to_playing:
                player.game_state = GameState.PLAYING
            return result.message

        answer = self.vocabulary.normalize(text)
        if answer in YES_ANSWERS:
            player.experienced = True
            intro = self.responses.text('experienced_player_intro')
        elif answer in NO_ANSWERS:
            player.experienced = False
            intro = self.responses.text('new_player_intro')
        else:
            return f"{self.responses.text('please_answer')}\n\n{self.responses.text('have_you_played')}"
        player.game_state = GameState.PLAYING
        return f"{intro}\n\n{self._look_here(player)}"

    def _restart_answer(self, player, text):
        answer = self.vocabulary.normalize(text)
        if answer in YES_ANSWERS:
            self.reset_game_state(player.session_id)
            logger.info("Session %s restarted", player.session_id)
            return f"{self.responses.text('restart_message')}\n\n{self._look_here(player)}"
        if answer in NO_ANSWERS:
            player.game_state = GameState.PLAYING
            return self.responses.text('restart_cancelled')
        return f"{self.responses.text('answer_yes_or_no')} {self.responses.text('restart_confirmation')}"

    def _quit_answer(self, player, text):
        answer = self.vocabulary.normalize(text)
        if answer in YES_ANSWERS:
            self.reset_game_state(player.session_id)
            player.game_state = GameState.WAITING_FOR_START_ANSWER
            logger.info("Session %s quit", player.session_id)
            return self.responses.text('have_you_played'), "quit"
        if answer in NO_ANSWERS:
            player.game_state = GameState.PLAYING
            return self.responses.text('quit_cancelled'), "response"
        return f"{self.responses.text('answer_yes_or_no')} {self.responses.text('quit_confirmation')}", "response"

    def _code_answer(self, player, text):
        target = player.pending_target
        waiting_for = player.game_state
        player.pending_target = None
        player.game_state = GameState.PLAYING
        if target is None:
            return self.responses.text('code_nothing_waiting')
        code = text.strip()
        if waiting_for == GameState.WAITING_FOR_UNLOCK_CODE:
            result = target.try_unlock(player, code, self.game_map)
        else:
            result = target.try_open(player, code, self.game_map)
        logger.debug("Code attempt on %s: %s", target.openable_name, result["success"])
        return result["message"]

    # ==========================================
    # NORMAL PLAY
    # ==========================================
    def _play(self, player, text):
        command = self.parser.parse(text, player.session_id, player)
        if not command.verb:
            return self.responses.text('not_understood', command=text.strip())

        messages = [self._execute(player, command)]
        for raw in command.sequence_commands:
            if player.game_state != GameState.PLAYING:
                break
            sub_command = self.parser.parse(raw, player.session_id, player)
            if sub_command.verb:
                messages.append(self._execute(player, sub_command))
            else:
                messages.append(self.responses.text('not_understood', command=raw))
        return "\n\n".join(messages)

    def _execute(self, player, command):
        verb = command.verb
        if not self.vocabulary.is_valid_verb_preposition(verb, command.preposition):
            return self.responses.text('verb_preposition_invalid')

        location_before = player.current_location
        if verb == 'look' and not command.direct_objects and not command.indirect_objects:
            self._boldable = location_before.get_long_description()

        result = self.dispatcher.dispatch(player, command)
        if result is not None:
            self.context.update_references(player.session_id, command.direct_objects)
            if player.current_location is not location_before:
                self._boldable = result.split("\n\n")[0]
            return result

        if verb == 'restart':
            player.game_state = GameState.WAITING_FOR_RESTART_CONFIRMATION
            return self.responses.text('restart_confirmation')
        if verb == 'quit':
            player.game_state = GameState.WAITING_FOR_QUIT_CONFIRMATION
            return self.responses.text('quit_confirmation')
        return self.responses.text('not_understood', command=command.original_input.strip())
