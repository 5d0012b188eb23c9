import logging

from storyloom.openables import Openable

logger = logging.getLogger(__name__)

# Never matched literally; handlers fall back to implied resolution
LITERAL_PRONOUNS = {'it', 'that', 'this'}

INVENTORY_SCOPE = 'inventory'
LOCATION_SCOPE = 'location'
SCENERY_SCOPE = 'scenery'
OPENABLE_LOCATION_SCOPE = 'openable_location'


def _found(entity, scope):
    return {"success": True, "entity": entity, "scope": scope}


def _not_found(reason="not_found"):
    return {"success": False, "entity": None, "scope": None, "reason": reason}


class ObjectResolver:
    """
    Maps a name typed by the player to a world object.

    Scopes are searched in a fixed order: inventory, visible items at the
    location, scenery, then the location's own unlock/open targets. The
    first scope with a match wins. A name recorded as a possessive
    reference for the session goes to that entity first, if it is in scope.
    """
    def __init__(self, context=None):
        self.context = context

    def resolve_object(self, name, player):
        if not name or name.lower() in LITERAL_PRONOUNS:
            return _not_found()
        location = player.current_location
        scopes = (
            (INVENTORY_SCOPE, player.inventory),
            (LOCATION_SCOPE, location.items),
            (SCENERY_SCOPE, location.scenery),
        )

        # a recorded possessive wins while its entity is still in reach
        if self.context is not None and player.session_id is not None:
            entity = self.context.possessive_reference(player.session_id, name)
            for scope, candidates in scopes:
                if entity is not None and any(c is entity for c in candidates):
                    return _found(entity, scope)

        for scope, candidates in scopes:
            for candidate in candidates:
                if candidate.matches_name(name):
                    return _found(candidate, scope)
        if isinstance(location, Openable):
            if location.matches_unlock_target(name) or location.matches_open_target(name):
                return _found(location, OPENABLE_LOCATION_SCOPE)
        return _not_found()

    def resolve_implied_object(self, verb, player):
        location = player.current_location
        candidates = []
        fallback = None

        if verb in ('open', 'unlock'):
            pool = player.inventory + location.items + location.scenery
            if verb == 'open':
                candidates = [o for o in pool if isinstance(o, Openable) and not o.opened]
            else:
                candidates = [o for o in pool if isinstance(o, Openable)
                              and o.requires_unlocking() and not o.unlocked]
            if isinstance(location, Openable):
                fallback = location
        elif verb == 'take':
            candidates = [i for i in location.items if location.is_reachable(i)]
        elif verb == 'drop':
            candidates = player.inventory
        elif verb == 'look':
            candidates = player.inventory + [i for i in location.items if location.is_reachable(i)]
        elif verb == 'eat':
            candidates = [i for i in player.inventory if i.edible]

        if len(candidates) == 1:
            return _found(candidates[0], 'implied')
        if not candidates and fallback is not None:
            return _found(fallback, OPENABLE_LOCATION_SCOPE)

        if self.context is not None and player.session_id is not None:
            recent = self.context.recent_references(player.session_id)
            if len(recent) == 1:
                result = self.resolve_object(recent[0], player)
                if result["success"]:
                    logger.debug("Implied %s target from context: %s", verb, recent[0])
                    return result
        return _not_found("ambiguous" if candidates else "no_candidates")
