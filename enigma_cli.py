"""
Command line front end: encrypt text, replay the demonstration or sweep all start positions.
"""
import argparse
import logging
import sys

import enigma
import enigma_check
import enigma_factory

logger = logging.getLogger(__name__)

DEMO_MESSAGE = 'HELLOENIGMA'
DEMO_SAMPLE = 'THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG'
CHECK_TEXT = 'THEQUICKBROWNFOX'


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def settings_from_args(args) -> enigma_factory.MachineSettings:
    return enigma_factory.MachineSettings(rotors=args.rotors,
                                          reflector=args.reflector,
                                          positions=args.positions,
                                          ring_settings=args.rings,
                                          plug_pairs=args.plugs)


def run_encrypt(args):
    machine = enigma_factory.build_machine(settings_from_args(args))
    if args.show_state:
        print(machine.get_current_state())
    print(machine.encrypt(args.text))
    if args.show_state:
        print(machine.get_current_state())


def run_demo(args):
    print('Example 1: single character')
    settings = enigma_factory.MachineSettings(positions=(0, 1, 2), plug_pairs=('AB', 'CD', 'EF'))
    machine = enigma_factory.build_machine(settings)
    print(machine.get_current_state())
    print(f"H -> {machine.encrypt_char('H')}")

    print('\nExample 2: message round trip')
    machine.set_rotor_positions(*settings.positions)
    encrypted = machine.encrypt(DEMO_MESSAGE)
    machine.set_rotor_positions(*settings.positions)
    print(f'Original:  {DEMO_MESSAGE}')
    print(f'Encrypted: {encrypted}')
    print(f'Decrypted: {machine.encrypt(encrypted)}')

    print('\nExample 3: rotors III II I, positions F K P, rings B C D')
    settings = enigma_factory.MachineSettings(rotors=('III', 'II', 'I'),
                                              positions=(5, 10, 15),
                                              ring_settings=(1, 2, 3),
                                              plug_pairs=('QW', 'ER', 'TY', 'UI', 'OP'))
    machine = enigma_factory.build_machine(settings)
    print(f'Plugboard: {machine.plugboard}')
    encrypted = machine.encrypt(DEMO_SAMPLE)
    machine.set_rotor_positions(*settings.positions)
    print(f'Original:  {DEMO_SAMPLE}')
    print(f'Encrypted: {encrypted}')
    print(f'Decrypted: {machine.encrypt(encrypted)}')

    print('\nExample 4: stepping from A A U')
    machine = enigma_factory.build_machine(enigma_factory.MachineSettings(positions=(0, 0, 20)))
    for i in range(5):
        out = machine.encrypt_char('A')
        print(f"After key {i + 1}: {' '.join(machine.get_rotor_letters())} (A -> {out})")


def run_check(args):
    settings = settings_from_args(args)
    failures = enigma_check.check_involution(settings, args.text, disable_tqdm=args.quiet)
    n_checked = enigma.ALPHABET_SIZE ** enigma.N_ROTORS
    print(f'{n_checked - len(failures)} of {n_checked} start positions decrypt correctly')
    return 1 if failures else 0


def add_machine_args(parser: argparse.ArgumentParser):
    parser.add_argument('--rotors', nargs=3, default=['I', 'II', 'III'], metavar='NAME',
                        help=f'rotors left to right, from {list(enigma_factory.ROTOR_WIRINGS)}')
    parser.add_argument('--reflector', default='B', type=str.upper, choices=list(enigma_factory.REFLECTOR_WIRINGS))
    parser.add_argument('--positions', nargs=3, default=['A', 'A', 'A'], metavar='POS',
                        help='start positions as letters or numbers')
    parser.add_argument('--rings', nargs=3, default=['0', '0', '0'], metavar='RING',
                        help='ring settings as letters or numbers')
    parser.add_argument('--plugs', nargs='*', default=[], metavar='PAIR', help='plugboard pairs such as AB CD')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='enigma-sim', description=__doc__)
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    encrypt_parser = subparsers.add_parser('encrypt', help='encrypt (or decrypt) a text')
    encrypt_parser.add_argument('text')
    encrypt_parser.add_argument('--show-state', action='store_true', help='print the machine state around the run')
    add_machine_args(encrypt_parser)
    encrypt_parser.set_defaults(func=run_encrypt)

    demo_parser = subparsers.add_parser('demo', help='replay the reference demonstration')
    demo_parser.set_defaults(func=run_demo)

    check_parser = subparsers.add_parser('check', help='round trip a text from every start position')
    check_parser.add_argument('text', nargs='?', default=CHECK_TEXT)
    check_parser.add_argument('--quiet', action='store_true', help='no progress bar')
    add_machine_args(check_parser)
    check_parser.set_defaults(func=run_check)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        return args.func(args) or 0
    except enigma.ConfigurationError as err:
        logger.error('invalid %s configuration: %s', err.kind.value, err)
        return 1


if __name__ == '__main__':
    sys.exit(main())
