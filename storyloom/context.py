import logging

logger = logging.getLogger(__name__)

PRONOUNS = {'it', 'them', 'they', 'its', 'their'}


class SessionContext:
    def __init__(self):
        self.last_direct_objects = []
        self.possessive_references = {}
        self.last_location = None

    def clear(self):
        self.last_direct_objects = []
        self.possessive_references = {}


class ContextTracker:
    """
    Remembers what each session talked about most recently, so a later
    "it" has something to point at. Nothing survives a change of location.
    """
    def __init__(self):
        self.sessions = {}

    def get(self, session_id):
        if session_id not in self.sessions:
            self.sessions[session_id] = SessionContext()
        return self.sessions[session_id]

    def update_location(self, session_id, location):
        ctx = self.get(session_id)
        if ctx.last_location is not location:
            if ctx.last_direct_objects or ctx.possessive_references:
                logger.debug("Session %s changed location, clearing context", session_id)
            ctx.clear()
            ctx.last_location = location

    def update_references(self, session_id, names):
        names = [n for n in names if n and not self.is_pronoun(n)]
        if names:
            self.get(session_id).last_direct_objects = list(names)

    def add_possessive(self, session_id, name, entity):
        self.get(session_id).possessive_references[name.lower()] = entity

    def possessive_reference(self, session_id, name):
        if session_id not in self.sessions or not name:
            return None
        return self.sessions[session_id].possessive_references.get(name.lower())

    def recent_references(self, session_id):
        if session_id not in self.sessions:
            return []
        return list(self.sessions[session_id].last_direct_objects)

    def is_pronoun(self, word):
        return bool(word) and word.lower() in PRONOUNS

    def clear_context(self, session_id):
        self.sessions.pop(session_id, None)
