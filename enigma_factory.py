"""
Historical wheel wirings and helpers to assemble a machine from them.
"""
import dataclasses
import logging

from enigma import (Enigma, Plugboard, Reflector, Rotor, ConfigurationError, ErrorKind,
                    ALPHABET_SIZE, N_ROTORS, index_of)

logger = logging.getLogger(__name__)

# name: (wiring, notch index)
ROTOR_WIRINGS = {
    'I': ('EKMFLGDQVZNTOWYHXUSPAIBRCJ', 16),
    'II': ('AJDKSIRUXBLHWTMCQGZNPYFVOE', 4),
    'III': ('BDFHJLCPRTXVZNYEIWGAKMUSQO', 21),
    'IV': ('ESOVPZJAYQUIRHXLNFTGKDCMWB', 9),
    'V': ('VZBRGITYUPSDNHLXAWMJQOFECK', 25),
}

REFLECTOR_WIRINGS = {
    'B': 'YRUHQSLDPXNGOKMIEBFZCWVJAT',
    'C': 'FVPJIAOYEDRZXWGCTKUQSBNMHL',
}


def create_rotor(name: str, position: int = 0, ring_setting: int = 0) -> Rotor:
    try:
        wiring, notch = ROTOR_WIRINGS[name.upper()]
    except KeyError:
        raise ConfigurationError(ErrorKind.UNKNOWN_COMPONENT,
                                 f'unknown rotor {name!r}, choose from {list(ROTOR_WIRINGS)}')
    return Rotor(wiring, notch, name=f'Rotor {name.upper()}', position=position, ring_setting=ring_setting)


def create_reflector(name: str) -> Reflector:
    try:
        wiring = REFLECTOR_WIRINGS[name.upper()]
    except KeyError:
        raise ConfigurationError(ErrorKind.UNKNOWN_COMPONENT,
                                 f'unknown reflector {name!r}, choose from {list(REFLECTOR_WIRINGS)}')
    return Reflector(wiring, name=f'Reflector {name.upper()}')


def parse_position(value) -> int:
    """
    Accepts either a letter ('A'..'Z') or a number; numbers are taken modulo the alphabet size.
    """
    if isinstance(value, int):
        return value % ALPHABET_SIZE
    value = str(value).strip()
    if value.lstrip('-').isdigit():
        return int(value) % ALPHABET_SIZE
    try:
        return index_of(value)
    except ValueError:
        raise ConfigurationError(ErrorKind.POSITION, f'{value!r} is neither a letter nor a number')


@dataclasses.dataclass
class MachineSettings:
    """Everything an operator needs to set up a machine for one message."""

    rotors: tuple = ('I', 'II', 'III')          # left to right
    reflector: str = 'B'
    positions: tuple = (0, 0, 0)
    ring_settings: tuple = (0, 0, 0)
    plug_pairs: tuple = ()

    def __post_init__(self):
        for field_name in ('rotors', 'positions', 'ring_settings'):
            if len(getattr(self, field_name)) != N_ROTORS:
                raise ConfigurationError(ErrorKind.ROTOR_COUNT,
                                         f'{field_name} needs {N_ROTORS} entries, got {getattr(self, field_name)}')
        self.rotors = tuple(self.rotors)
        self.positions = tuple(parse_position(pos) for pos in self.positions)
        self.ring_settings = tuple(parse_position(setting) for setting in self.ring_settings)
        self.plug_pairs = tuple(tuple(pair) for pair in self.plug_pairs)
        for pair in self.plug_pairs:
            if len(pair) != 2:
                raise ConfigurationError(ErrorKind.PLUGBOARD, f'plug {"".join(pair)!r} must join exactly two letters')


def build_machine(settings: MachineSettings) -> Enigma:
    rotors = [create_rotor(name) for name in settings.rotors]
    machine = Enigma(rotors, create_reflector(settings.reflector), Plugboard(settings.plug_pairs))
    machine.set_rotor_positions(*settings.positions)
    machine.set_ring_settings(*settings.ring_settings)
    logger.debug('built machine %s with reflector %s, rings %s, plugs %s',
                 ' '.join(settings.rotors), settings.reflector, settings.ring_settings, machine.plugboard)
    return machine
