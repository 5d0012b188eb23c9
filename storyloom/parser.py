import logging
import re

from storyloom.context import ContextTracker, PRONOUNS
from storyloom.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

SINGLE = 'SINGLE'
CONJUNCTION = 'CONJUNCTION'
SEQUENCE = 'SEQUENCE'

SEQUENCE_PATTERN = re.compile(r"\s*(?:;|\bthen\b)\s*", re.IGNORECASE)
CONJUNCTION_WORDS = {'and', '&'}


class ParsedCommand:
    """A read-only view of one player command."""
    __slots__ = ('_verb', '_direct', '_indirect', '_preposition', '_type', '_original', '_sequence')

    def __init__(self, verb, direct_objects=(), indirect_objects=(), preposition=None,
                 command_type=SINGLE, original_input='', sequence_commands=()):
        self._verb = verb
        self._direct = tuple(direct_objects)
        self._indirect = tuple(indirect_objects)
        self._preposition = preposition
        self._type = command_type
        self._original = original_input
        self._sequence = tuple(sequence_commands)

    @property
    def verb(self): return self._verb

    @property
    def direct_objects(self): return self._direct

    @property
    def indirect_objects(self): return self._indirect

    @property
    def preposition(self): return self._preposition

    @property
    def command_type(self): return self._type

    @property
    def original_input(self): return self._original

    @property
    def sequence_commands(self): return self._sequence

    @property
    def implied_object(self):
        return not self._direct

    @property
    def first_direct_object(self):
        return self._direct[0] if self._direct else None

    @property
    def first_indirect_object(self):
        return self._indirect[0] if self._indirect else None

    def has_preposition(self):
        return bool(self._preposition)

    def has_sequence_commands(self):
        return bool(self._sequence)

    def to_dict(self):
        return {
            'verb': self._verb,
            'direct_objects': list(self._direct),
            'indirect_objects': list(self._indirect),
            'preposition': self._preposition,
            'type': self._type,
            'implied_object': self.implied_object,
            'original_input': self._original,
            'sequence_commands': list(self._sequence),
        }

    def __repr__(self):
        return f"ParsedCommand({self.to_dict()!r})"


class CommandParser:
    def __init__(self, vocabulary=None, context=None):
        self.vocabulary = vocabulary or Vocabulary()
        self.context = context or ContextTracker()

    def parse(self, raw, session_id=None, player=None):
        original = raw or ''
        if session_id is not None and player is not None:
            self.context.update_location(session_id, player.current_location)

        # --- SEQUENCE SPLIT ---
        # later segments are kept as typed
        segments = [s.strip() for s in SEQUENCE_PATTERN.split(original)]
        segments = [s for s in segments if s]
        if not segments:
            return ParsedCommand('', original_input=original)
        sequence = segments[1:]

        text = self.vocabulary.normalize(segments[0]).replace('&', ' & ')
        tokens = text.split()

        if sequence:
            command_type = SEQUENCE
        elif any(t in CONJUNCTION_WORDS for t in tokens):
            command_type = CONJUNCTION
        else:
            command_type = SINGLE

        command = self._parse_segment(tokens, original, command_type, sequence)
        logger.debug("Parsed %r -> %s", original, command.to_dict())
        return command

    def _parse_segment(self, tokens, original, command_type, sequence):
        vocab = self.vocabulary
        first, rest = tokens[0], tokens[1:]

        # Bare direction ("n", "north", "out") is movement
        if not rest and vocab.is_direction(first):
            return ParsedCommand('go', [vocab.normalize_direction(first)], [], None,
                                 command_type, original, sequence)

        if first == 'pick' and rest and rest[0] == 'up':
            rest = rest[1:]
        verb = vocab.normalize_verb(first)

        if vocab.is_movement_verb(verb):
            if rest and vocab.is_direction(rest[0]):
                return ParsedCommand(verb, [vocab.normalize_direction(rest[0])], [], None,
                                     command_type, original, sequence)

        preposition = None
        direct_tokens, indirect_tokens = rest, []
        for i, word in enumerate(rest):
            if vocab.is_preposition(word) and not vocab.should_treat_as_direction(word, verb):
                preposition = word
                direct_tokens, indirect_tokens = rest[:i], rest[i + 1:]
                break

        direct = self.extract_objects(direct_tokens, verb)
        indirect = self.extract_objects(indirect_tokens, verb)
        return ParsedCommand(verb, direct, indirect, preposition, command_type, original, sequence)

    def extract_objects(self, tokens, verb=None):
        """
        Splits an object phrase into object names.
        Articles are dropped, "and"/"&" separate objects, pronouns stand alone.
        """
        objects, current = [], []
        movement = verb is not None and self.vocabulary.is_movement_verb(verb)

        def flush():
            if current:
                objects.append(" ".join(current))
                del current[:]

        for token in tokens:
            if token in CONJUNCTION_WORDS:
                flush()
            elif self.vocabulary.is_article(token):
                continue
            elif token in PRONOUNS:
                flush()
                objects.append(token)
            elif movement and self.vocabulary.is_direction(token):
                current.append(self.vocabulary.normalize_direction(token))
            else:
                current.append(token)
        flush()
        return objects

    def clear_context(self, session_id):
        self.context.clear_context(session_id)
