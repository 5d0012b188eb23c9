import logging

from storyloom.containment import holder_of, put_item_in_container
from storyloom.entities import Item
from storyloom.errors import UnknownVerbError

logger = logging.getLogger(__name__)

# Returned by a handler that has no opinion about the command
FALLBACK = "FALLBACK"


class BaseHandler:
    verbs = ()

    def handle(self, player, command):
        raise NotImplementedError


class CommandContext:
    """What a custom command gets to work with besides the player and command."""
    def __init__(self, player, resolver, responses, game_map=None):
        self.player = player
        self.resolver = resolver
        self.responses = responses
        self.game_map = game_map

    @property
    def current_location(self):
        return self.player.current_location

    def resolve_item(self, name):
        result = self.resolver.resolve_object(name, self.player)
        if result["success"] and isinstance(result["entity"], Item):
            return result["entity"]
        return None

    def player_has_item(self, name):
        return self.player.has_item(name)

    def put_item_in_container(self, item_name, container_name, preposition='in'):
        return put_item_in_container(self.player, item_name, container_name, preposition, self.responses)

    def is_item_in_container(self, item, container=None):
        """Either argument may be a name or the object itself."""
        if isinstance(item, str):
            item = self.resolve_item(item)
            if item is None:
                return False
        holder = holder_of(self.player, item)
        if holder is None:
            return False
        if isinstance(container, str):
            held_by = holder.get_container_for_item(item)
            return held_by is not None and held_by.matches_name(container)
        return holder.is_item_in_container(item, container)

    def reveal_hidden_item(self, name):
        return self.current_location.reveal_hidden_item_by_name(name)


class CustomCommand(BaseHandler):
    """
    Wraps a ``func(player, command, context)`` so it can sit in a verb chain.
    Returning None or FALLBACK hands the turn to the next handler.
    """
    def __init__(self, verb, func, context_factory, aliases=()):
        self.verbs = (verb,)
        self.aliases = tuple(aliases)
        self.func = func
        self.context_factory = context_factory

    def handle(self, player, command):
        return self.func(player, command, self.context_factory(player))


class CommandDispatcher:
    def __init__(self, vocabulary=None):
        self.vocabulary = vocabulary
        self.builtins = {}
        self.overrides = {}

    def register_builtin(self, handler):
        for verb in handler.verbs:
            if verb in self.builtins:
                logger.debug("Replacing built-in handler for '%s'", verb)
            self.builtins[verb] = handler

    def register_override(self, verb, handler, aliases=()):
        self.overrides.setdefault(verb, []).append(handler)
        if self.vocabulary is not None:
            for alias in aliases:
                self.vocabulary.add_verb_synonym(alias, verb)
        logger.debug("Registered override for '%s' (aliases: %s)", verb, list(aliases))

    def unregister(self, verb):
        removed = self.overrides.pop(verb, None)
        builtin = self.builtins.pop(verb, None)
        if removed is None and builtin is None:
            raise UnknownVerbError(verb)

    def has_handler(self, verb):
        return bool(self.overrides.get(verb)) or verb in self.builtins

    def registered_verbs(self):
        return sorted(set(self.builtins) | {v for v, chain in self.overrides.items() if chain})

    def chain(self, verb):
        handlers = list(self.overrides.get(verb, []))
        if verb in self.builtins:
            handlers.append(self.builtins[verb])
        return handlers

    def dispatch(self, player, command):
        """Returns the first handler's text, or None if every handler passed."""
        for handler in self.chain(command.verb):
            result = handler.handle(player, command)
            if result is None or result == FALLBACK:
                continue
            return result
        return None
