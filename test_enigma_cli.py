import contextlib
import io

import unittest as ut

import enigma_cli


def run_cli(argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        status = enigma_cli.main(argv)
    return status, out.getvalue()


class CliTest(ut.TestCase):
    def test_encrypt(self):
        status, out = run_cli(['encrypt', 'H', '--positions', 'A', 'B', 'C', '--plugs', 'AB', 'CD', 'EF'])
        self.assertEqual(status, 0)
        self.assertEqual(out, 'R\n')

        status, out = run_cli(['encrypt', 'aaaaa'])
        self.assertEqual(out, 'BDZGO\n')

    def test_round_trip(self):
        machine_args = ['--rotors', 'III', 'I', 'IV', '--reflector', 'C', '--positions', '5', 'K', '15',
                        '--rings', 'B', '2', 'D', '--plugs', 'QW', 'ER']
        _, encrypted = run_cli(['encrypt', 'Attack at dawn!'] + machine_args)
        _, decrypted = run_cli(['encrypt', encrypted.strip()] + machine_args)
        self.assertEqual(decrypted, 'ATTACK AT DAWN!\n')

    def test_show_state(self):
        _, out = run_cli(['encrypt', 'HELLO', '--positions', 'A', 'B', 'C', '--plugs', 'AB', '--show-state'])
        lines = out.splitlines()
        self.assertEqual(lines[0], 'Rotor Positions: ABC')
        self.assertEqual(lines[1], 'Plugboard: AB')
        self.assertEqual(lines[3], 'Rotor Positions: ABH')

    def test_reflector_any_case(self):
        status, upper = run_cli(['encrypt', 'HELLO', '--reflector', 'C'])
        self.assertEqual(status, 0)
        status, lower = run_cli(['encrypt', 'HELLO', '--reflector', 'c'])
        self.assertEqual(status, 0)
        self.assertEqual(lower, upper)

    def test_configuration_errors(self):
        status, _ = run_cli(['encrypt', 'HELLO', '--rotors', 'I', 'II', 'IX'])
        self.assertEqual(status, 1)
        status, _ = run_cli(['encrypt', 'HELLO', '--plugs', 'AB', 'AC'])
        self.assertEqual(status, 1)
        status, _ = run_cli(['encrypt', 'HELLO', '--positions', 'A', 'B', '?'])
        self.assertEqual(status, 1)
        status, _ = run_cli(['encrypt', 'HELLO', '--plugs', 'ABC'])
        self.assertEqual(status, 1)

    def test_demo(self):
        status, out = run_cli(['demo'])
        self.assertEqual(status, 0)
        self.assertIn('H -> R', out)
        self.assertIn('Decrypted: HELLOENIGMA', out)
        self.assertIn('Decrypted: THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG', out)
        self.assertIn('After key 1: B B V', out)
        self.assertIn('After key 5: B B Z', out)

    def test_check(self):
        status, out = run_cli(['check', 'ENIGMA', '--quiet', '--positions', 'A', 'A', 'A'])
        self.assertEqual(status, 0)
        self.assertIn('17576 of 17576 start positions decrypt correctly', out)


if __name__ == "__main__":
    ut.main()
