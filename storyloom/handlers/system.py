from storyloom.handlers.base import GameHandler
from storyloom.hints import next_hint


class HelpHandler(GameHandler):
    verbs = ('help', 'info')

    def handle(self, player, command):
        return self.text(command.verb)


class HintHandler(GameHandler):
    verbs = ('hint',)

    def handle(self, player, command):
        phases = self.game_map.hint_phases if self.game_map is not None else []
        hint = next_hint(phases, player, self.game_map)
        return hint or self.text('no_hints')
