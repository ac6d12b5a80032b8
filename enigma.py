import copy
import enum
import logging
import string
from collections import namedtuple

import numpy as np

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase
ALPHABET_SIZE = len(ALPHABET)
N_ROTORS = 3

_CHAR_TO_NUMBER_MAP = {char: i for i, char in enumerate(ALPHABET)}


class ErrorKind(enum.Enum):
    WIRING = 'wiring'
    ROTOR_COUNT = 'rotor_count'
    PLUGBOARD = 'plugboard'
    UNKNOWN_COMPONENT = 'unknown_component'
    POSITION = 'position'


class ConfigurationError(ValueError):
    """
    Raised when a machine or one of its parts is set up wrongly.
    The kind tells callers which part of the configuration was rejected.
    """
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


def index_of(letter: str) -> int:
    try:
        return _CHAR_TO_NUMBER_MAP[letter.upper()]
    except (KeyError, AttributeError):
        raise ValueError(f'{letter!r} is not a letter of the alphabet')


def letter_of(index: int) -> str:
    # python modulo is never negative for a positive divisor
    return ALPHABET[int(index) % ALPHABET_SIZE]


def gen_wiring(seed: int) -> str:
    rng = np.random.default_rng(seed)
    return ''.join(ALPHABET[i] for i in rng.permutation(ALPHABET_SIZE))


def gen_plug_pairs(n_pairs: int, seed: int) -> list:
    if not 0 <= n_pairs <= ALPHABET_SIZE // 2:
        raise ConfigurationError(ErrorKind.PLUGBOARD, f'cannot place {n_pairs} plugs on {ALPHABET_SIZE} jacks')
    rng = np.random.default_rng(seed)
    # random jacks, consecutive ones get connected
    jacks = rng.choice(ALPHABET_SIZE, size=2 * n_pairs, replace=False)
    return [(ALPHABET[first], ALPHABET[second]) for first, second in zip(jacks[::2], jacks[1::2])]


def gen_reflector_wiring(seed: int) -> str:
    wiring = [''] * ALPHABET_SIZE
    for first, second in gen_plug_pairs(ALPHABET_SIZE // 2, seed):
        wiring[index_of(first)] = second
        wiring[index_of(second)] = first
    return ''.join(wiring)


def _parse_wiring(wiring: str, name: str) -> list:
    if len(wiring) != ALPHABET_SIZE:
        raise ConfigurationError(ErrorKind.WIRING,
                                 f'{name}: wiring must be exactly {ALPHABET_SIZE} characters, got {len(wiring)}')
    wiring = wiring.upper()
    if sorted(wiring) != list(ALPHABET):
        raise ConfigurationError(ErrorKind.WIRING, f'{name}: wiring {wiring} is not a permutation of the alphabet')
    return [index_of(char) for char in wiring]


class PermutingStage:
    """
    Common part of every wheel in the signal path: a wiring, a rotational
    position and a ring setting. The wiring is fixed to the wheel body, the
    body sits at ``position - ring_setting`` relative to the entry contacts.
    """
    def __init__(self, wiring: str, name: str = 'Component'):
        self.name = name
        self.wiring = _parse_wiring(wiring, name)
        self.position = 0
        self.ring_setting = 0

    def set_position(self, pos: int):
        self.position = pos % ALPHABET_SIZE

    def set_ring_setting(self, setting: int):
        self.ring_setting = setting % ALPHABET_SIZE

    def apply_offset(self, signal: int, forward: bool) -> int:
        offset = (self.position - self.ring_setting) % ALPHABET_SIZE
        if forward:
            return (signal + offset) % ALPHABET_SIZE
        return (signal - offset) % ALPHABET_SIZE

    def process(self, letter: str, forward: bool = True) -> str:
        raise NotImplementedError

    def __repr__(self):
        return f'<{type(self).__name__} {self.name!r} pos={self.position} ring={self.ring_setting}>'


class Rotor(PermutingStage):
    def __init__(self, wiring: str, notch: int, name: str = 'Rotor', position: int = 0, ring_setting: int = 0):
        super().__init__(wiring, name)
        # inverse[wiring[i]] == i
        self.inverse_wiring = np.argsort(self.wiring).tolist()
        self.notch = notch % ALPHABET_SIZE
        self.set_position(position)
        self.set_ring_setting(ring_setting)

    def set_notch(self, notch: int):
        self.notch = notch % ALPHABET_SIZE

    def is_at_notch(self) -> bool:
        return self.position == self.notch

    def rotate(self):
        self.position = (self.position + 1) % ALPHABET_SIZE

    def process(self, letter: str, forward: bool = True) -> str:
        signal = self.apply_offset(index_of(letter), forward=True)
        if forward:
            signal = self.wiring[signal]
        else:
            signal = self.inverse_wiring[signal]
        return letter_of(self.apply_offset(signal, forward=False))


class Reflector(PermutingStage):
    def __init__(self, wiring: str, name: str = 'Reflector'):
        super().__init__(wiring, name)
        # every contact has to be wired to a different one, symmetrically
        for i, out in enumerate(self.wiring):
            if out == i or self.wiring[out] != i:
                raise ConfigurationError(ErrorKind.WIRING,
                                         f'{name}: wiring must be an involution without fixed points '
                                         f'({letter_of(i)} -> {letter_of(out)})')

    def process(self, letter: str, forward: bool = True) -> str:
        return letter_of(self.wiring[index_of(letter)])


class Plugboard:
    def __init__(self, pairs=()):
        self.swap_dict = dict()
        for first, second in pairs:
            self.connect(first, second)

    def connect(self, first: str, second: str):
        try:
            first, second = letter_of(index_of(first)), letter_of(index_of(second))
        except ValueError as err:
            raise ConfigurationError(ErrorKind.PLUGBOARD, str(err))
        if first == second:
            raise ConfigurationError(ErrorKind.PLUGBOARD, f'cannot connect {first} to itself')
        for letter in (first, second):
            if letter in self.swap_dict:
                raise ConfigurationError(ErrorKind.PLUGBOARD,
                                         f'{letter} is already connected to {self.swap_dict[letter]}')
        self.swap_dict[first] = second
        self.swap_dict[second] = first
        logger.debug('plugboard: connected %s%s', first, second)

    def disconnect(self, letter: str):
        letter = letter.upper()
        if letter not in self.swap_dict:
            raise ConfigurationError(ErrorKind.PLUGBOARD, f'{letter} is not connected')
        del self.swap_dict[self.swap_dict.pop(letter)]

    def clear(self):
        self.swap_dict.clear()

    def process(self, letter: str) -> str:
        letter = letter.upper()
        return self.swap_dict.get(letter, letter)

    def describe(self) -> list:
        return [(first, self.swap_dict[first]) for first in ALPHABET
                if first in self.swap_dict and first < self.swap_dict[first]]

    def __len__(self):
        return len(self.swap_dict) // 2

    def __str__(self):
        return ' '.join(first + second for first, second in self.describe())


MachineState = namedtuple('MachineState', ['positions', 'ring_settings', 'plug_pairs'])


class Enigma:
    def __init__(self, rotors, reflector: Reflector, plugboard: Plugboard = None):
        rotors = list(rotors)
        if len(rotors) != N_ROTORS:
            raise ConfigurationError(ErrorKind.ROTOR_COUNT,
                                     f'the machine needs exactly {N_ROTORS} rotors, got {len(rotors)}')
        # the machine owns its wheels, changing the originals afterwards must not affect it
        self.rotors = copy.deepcopy(rotors)
        self.reflector = reflector
        self.plugboard = plugboard if plugboard is not None else Plugboard()

    def set_rotor_positions(self, left: int, middle: int, right: int):
        for rot, pos in zip(self.rotors, (left, middle, right)):
            rot.set_position(pos)

    def set_ring_settings(self, left: int, middle: int, right: int):
        for rot, setting in zip(self.rotors, (left, middle, right)):
            rot.set_ring_setting(setting)

    def set_plugboard_connections(self, pairs):
        self.plugboard.clear()
        for first, second in pairs:
            self.plugboard.connect(first, second)

    def get_rotor_positions(self) -> list:
        return [rot.position for rot in self.rotors]

    def get_rotor_letters(self) -> str:
        return ''.join(letter_of(pos) for pos in self.get_rotor_positions())

    def get_plugboard_connections(self) -> list:
        return self.plugboard.describe()

    def get_current_state(self) -> str:
        return f'Rotor Positions: {self.get_rotor_letters()}\nPlugboard: {self.plugboard}'

    def snapshot(self) -> MachineState:
        return MachineState(positions=tuple(self.get_rotor_positions()),
                            ring_settings=tuple(rot.ring_setting for rot in self.rotors),
                            plug_pairs=tuple(self.get_plugboard_connections()))

    def restore(self, state: MachineState):
        self.set_rotor_positions(*state.positions)
        self.set_ring_settings(*state.ring_settings)
        self.set_plugboard_connections(state.plug_pairs)

    def step_rotors(self):
        left, middle, right = self.rotors
        right.rotate()
        carry_middle = right.is_at_notch()
        carry_left = middle.is_at_notch()
        if carry_middle:
            middle.rotate()
            left.rotate()
        if carry_left:
            left.rotate()
        logger.debug('stepped to %d %d %d', left.position, middle.position, right.position)

    def encrypt_char(self, letter: str) -> str:
        # reject a bad key before any wheel moves
        index_of(letter)
        # wheels move before the key closes the circuit
        self.step_rotors()

        letter = self.plugboard.process(letter)
        for rot in reversed(self.rotors):
            letter = rot.process(letter, forward=True)
        letter = self.reflector.process(letter)
        for rot in self.rotors:
            letter = rot.process(letter, forward=False)
        return self.plugboard.process(letter)

    def encrypt(self, text: str) -> str:
        output = str()
        for char in text:
            if char in string.ascii_letters:
                output += self.encrypt_char(char)
            else:
                output += char
        return output
