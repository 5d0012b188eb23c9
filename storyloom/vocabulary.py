import re

# ==========================================
# WORD LISTS
# ==========================================
VERB_SYNONYMS = {
    # Movement
    'go': 'go', 'move': 'go', 'walk': 'go', 'run': 'go',
    # Looking
    'look': 'look', 'l': 'look', 'examine': 'look', 'x': 'look',
    'read': 'read',
    # Items
    'take': 'take', 'get': 'take', 'grab': 'take', 'pick': 'take', 'pickup': 'take',
    'drop': 'drop', 'leave': 'drop',
    'put': 'put', 'place': 'put', 'insert': 'put',
    'inventory': 'inventory', 'inv': 'inventory', 'i': 'inventory',
    # Openables
    'open': 'open', 'unlock': 'unlock',
    # Scenery
    'climb': 'climb', 'kick': 'kick', 'punch': 'punch', 'hit': 'punch',
    'drink': 'drink', 'swim': 'swim', 'eat': 'eat',
    # System
    'help': 'help', 'h': 'help', '?': 'help',
    'info': 'info', 'information': 'info',
    'hint': 'hint', 'hints': 'hint',
    'quit': 'quit', 'exit': 'quit', 'q': 'quit',
    'restart': 'restart', 'reset': 'restart',
}

DIRECTIONS = {
    'north': 'north', 'n': 'north',
    'south': 'south', 's': 'south',
    'east': 'east', 'e': 'east',
    'west': 'west', 'w': 'west',
    'up': 'up', 'u': 'up',
    'down': 'down', 'd': 'down',
    'northeast': 'northeast', 'ne': 'northeast',
    'northwest': 'northwest', 'nw': 'northwest',
    'southeast': 'southeast', 'se': 'southeast',
    'southwest': 'southwest', 'sw': 'southwest',
    'in': 'in', 'out': 'out',
}

OPPOSITE_DIRECTIONS = {
    'north': 'south', 'south': 'north',
    'east': 'west', 'west': 'east',
    'up': 'down', 'down': 'up',
    'northeast': 'southwest', 'southwest': 'northeast',
    'northwest': 'southeast', 'southeast': 'northwest',
    'in': 'out', 'out': 'in',
}

ARTICLES = {'a', 'an', 'the', 'some', 'any'}

PREPOSITIONS = {
    'in', 'on', 'under', 'behind', 'above', 'below', 'inside', 'outside',
    'around', 'from', 'into', 'onto', 'toward', 'towards', 'with', 'using',
    'by', 'for', 'against', 'about', 'at', 'up', 'down', 'to',
}

# Words that are a direction after "go" but a preposition elsewhere
AMBIGUOUS_WORDS = {'up', 'down', 'to', 'in', 'out'}

MOVEMENT_VERBS = {'go'}

VERB_PREPOSITIONS = {
    'put': {'in', 'into', 'on', 'onto'},
    'take': {'from'},
    'look': {'at', 'around', 'in', 'inside', 'into', 'under'},
    'open': {'with', 'using'},
    'unlock': {'with', 'using'},
}


class Vocabulary:
    """
    Canonical word forms for the command grammar.
    Instances are mutable so custom verbs can register their aliases.
    """
    def __init__(self):
        self.verbs = dict(VERB_SYNONYMS)
        self.directions = dict(DIRECTIONS)

    @staticmethod
    def normalize(text):
        return re.sub(r'\s+', ' ', (text or '').strip().lower())

    def normalize_verb(self, word):
        word = word.lower()
        return self.verbs.get(word, word)

    def normalize_direction(self, word):
        """Returns the canonical direction for ``word`` or None."""
        return self.directions.get(word.lower())

    def is_direction(self, word):
        return word.lower() in self.directions

    def is_movement_verb(self, verb):
        return self.normalize_verb(verb) in MOVEMENT_VERBS

    def is_article(self, word):
        return word.lower() in ARTICLES

    def is_preposition(self, word):
        return word.lower() in PREPOSITIONS

    def should_treat_as_direction(self, word, preceding_verb=None):
        word = word.lower()
        if word in AMBIGUOUS_WORDS:
            if preceding_verb and self.is_movement_verb(preceding_verb):
                return True
            return word in ('up', 'down')
        return self.is_direction(word)

    def is_valid_verb_preposition(self, verb, preposition):
        if not preposition:
            return True
        allowed = VERB_PREPOSITIONS.get(self.normalize_verb(verb))
        if allowed is None:
            return True
        return preposition.lower() in allowed

    def strip_articles(self, phrase):
        words = [w for w in phrase.split() if not self.is_article(w)]
        return " ".join(words)

    def add_verb_synonym(self, synonym, canonical):
        self.verbs[synonym.lower()] = canonical.lower()

    def add_direction(self, word, canonical):
        self.directions[word.lower()] = canonical.lower()
