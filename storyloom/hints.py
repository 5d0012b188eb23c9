class HintPhase:
    """
    One step of the hint progression. The phase counts as complete once
    every condition in ``complete_when`` holds:
    ``has_item`` (carried), ``visited`` (location id) or ``opened``
    (an openable location id or item name that has been opened).
    """
    def __init__(self, key, hints, complete_when=None):
        self.key = key
        self.hints = list(hints)
        self.complete_when = dict(complete_when or {})

    def is_complete(self, player, game_map):
        if not self.complete_when:
            return False
        for condition, target in self.complete_when.items():
            if condition == 'has_item':
                if not player.has_item(target): return False
            elif condition == 'visited':
                location = game_map.get_location(target)
                if location is None or not location.visited: return False
            elif condition == 'opened':
                openable = game_map.find_openable(target)
                if openable is None or not openable.opened: return False
            else:
                return False
        return True


def current_phase(phases, player, game_map):
    for phase in phases:
        if not phase.is_complete(player, game_map):
            return phase
    return phases[-1] if phases else None


def next_hint(phases, player, game_map):
    """Returns the next hint for the player's phase, or None without phases."""
    phase = current_phase(phases, player, game_map)
    if phase is None or not phase.hints:
        return None
    if player.last_hint_phase != phase.key:
        player.hint_counts = {}
        player.last_hint_phase = phase.key
    shown = player.hint_counts.get(phase.key, 0)
    player.hint_counts[phase.key] = shown + 1
    return phase.hints[min(shown, len(phase.hints) - 1)]
