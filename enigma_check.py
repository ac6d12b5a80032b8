import logging

import baseconvert
import tqdm

import enigma
import enigma_factory

logger = logging.getLogger(__name__)


def iter_position_triples(n_rotors: int = enigma.N_ROTORS, n_positions: int = enigma.ALPHABET_SIZE):
    """
    Every start position of the wheels, left to right, the right wheel counting fastest:
    [0, 0, 0], [0, 0, 1], ..., [0, 0, 25], [0, 1, 0], ..., [25, 25, 25]
    """
    for lin_idx in range(n_positions ** n_rotors):
        # a start position is the linear index written with one digit per wheel
        digits = list(baseconvert.base(lin_idx, 10, n_positions))
        yield [0] * (n_rotors - len(digits)) + digits


def is_bijective(machine: enigma.Enigma) -> bool:
    """
    Feed every letter to the machine from the same state, the outputs must be all distinct.
    The machine is left in the state it was in before.
    """
    state = machine.snapshot()
    outputs = set()
    for letter in enigma.ALPHABET:
        machine.restore(state)
        outputs.add(machine.encrypt_char(letter))
    machine.restore(state)
    return len(outputs) == enigma.ALPHABET_SIZE


def check_involution(settings: enigma_factory.MachineSettings, text: str, disable_tqdm=False) -> list:
    """
    Encrypt and decrypt text for every starting position of the rotors.
    :return: the start positions for which decrypting did not give back the text
    """
    machine = enigma_factory.build_machine(settings)
    text = text.upper()

    failures = list()
    n_starts = enigma.ALPHABET_SIZE ** enigma.N_ROTORS
    for pos in tqdm.tqdm(iter_position_triples(), total=n_starts, disable=disable_tqdm):
        machine.set_rotor_positions(*pos)
        encrypted = machine.encrypt(text)
        machine.set_rotor_positions(*pos)
        if machine.encrypt(encrypted) != text:
            logger.warning('round trip failed for start positions %s', pos)
            failures.append(pos)
    return failures
