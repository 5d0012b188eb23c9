# ==========================================
# INTERACTION TYPES
# ==========================================
CLIMB = 'climb'
DRINK = 'drink'
EAT = 'eat'
KICK = 'kick'
LOOK = 'look'
PUNCH = 'punch'
READ = 'read'
SWIM = 'swim'
TAKE = 'take'

INTERACTION_TYPES = (CLIMB, DRINK, EAT, KICK, LOOK, PUNCH, READ, SWIM, TAKE)


class Nameable:
    """Anything the player can refer to by name or alias."""
    def __init__(self, name, aliases=None):
        self.name = name
        self.aliases = list(aliases or [])

    def matches_name(self, name):
        if not name: return False
        name = name.lower()
        if self.name.lower() == name: return True
        for alias in self.aliases:
            if alias.lower() == name: return True
        return False

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r}>"


class Item(Nameable):
    def __init__(self, name, inventory_description=None, location_description=None,
                 detailed_description=None, aliases=None, edible=False):
        super().__init__(name, aliases)
        self.inventory_description = inventory_description or f"A {name}"
        self.location_description = location_description or f"There is a {name} here."
        self.detailed_description = detailed_description or f"It's a {name}."
        self.edible = edible


class SceneryObject(Nameable):
    """
    A fixed part of a location. It answers interactions from a response
    table and may hold items when ``is_container`` is set.
    """
    def __init__(self, name, aliases=None, responses=None, custom_responses=None,
                 is_container=False, allowed_item_names=None, prepositions=None, capacity=0):
        super().__init__(name, aliases)
        self.responses = {k.lower(): v for k, v in (responses or {}).items()}
        self.custom_responses = {k.lower(): v for k, v in (custom_responses or {}).items()}
        self.is_container = is_container
        self.allowed_item_names = {n.lower() for n in (allowed_item_names or [])}
        if prepositions:
            self.prepositions = [p.lower() for p in prepositions]
        else:
            self.prepositions = ['on', 'onto'] if is_container else []
        self.capacity = capacity

    def get_response(self, interaction):
        return self.responses.get(interaction)

    def get_custom_response(self, verb):
        return self.custom_responses.get(verb.lower())
