from storyloom.dispatcher import BaseHandler


class GameHandler(BaseHandler):
    """Shared plumbing for the built-in verbs."""
    def __init__(self, resolver, context, responses, game_map=None):
        self.resolver = resolver
        self.context = context
        self.responses = responses
        self.game_map = game_map

    def text(self, key, **values):
        return self.responses.text(key, **values)

    def resolve(self, name, verb, player):
        """Literal resolution, falling back to the implied object for pronouns."""
        result = self.resolver.resolve_object(name, player)
        if not result["success"] and (self.context.is_pronoun(name) or name in ('that', 'this')):
            result = self.resolver.resolve_implied_object(verb, player)
        return result
