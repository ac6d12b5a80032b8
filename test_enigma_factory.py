import unittest as ut

import enigma
import enigma_factory


class FactoryTest(ut.TestCase):
    def test_historical_rotors(self):
        for name, (wiring, notch) in enigma_factory.ROTOR_WIRINGS.items():
            rotor = enigma_factory.create_rotor(name, position=3, ring_setting=28)
            self.assertEqual(rotor.name, f'Rotor {name}')
            self.assertEqual(rotor.notch, notch)
            self.assertEqual(rotor.position, 3)
            self.assertEqual(rotor.ring_setting, 2)
            for i in range(enigma.ALPHABET_SIZE):
                self.assertEqual(rotor.inverse_wiring[rotor.wiring[i]], i)

    def test_historical_reflectors(self):
        for name in enigma_factory.REFLECTOR_WIRINGS:
            reflector = enigma_factory.create_reflector(name.lower())
            self.assertEqual(reflector.name, f'Reflector {name}')

    def test_unknown_component(self):
        with self.assertRaises(enigma.ConfigurationError) as ctx:
            enigma_factory.create_rotor('IX')
        self.assertEqual(ctx.exception.kind, enigma.ErrorKind.UNKNOWN_COMPONENT)
        with self.assertRaises(enigma.ConfigurationError):
            enigma_factory.create_reflector('A')

    def test_parse_position(self):
        self.assertEqual(enigma_factory.parse_position('C'), 2)
        self.assertEqual(enigma_factory.parse_position('c'), 2)
        self.assertEqual(enigma_factory.parse_position('12'), 12)
        self.assertEqual(enigma_factory.parse_position(' 27 '), 1)
        self.assertEqual(enigma_factory.parse_position(-1), 25)
        with self.assertRaises(enigma.ConfigurationError) as ctx:
            enigma_factory.parse_position('?')
        self.assertEqual(ctx.exception.kind, enigma.ErrorKind.POSITION)
        with self.assertRaises(enigma.ConfigurationError):
            enigma_factory.MachineSettings(positions=('A', 'B', '%'))


class MachineSettingsTest(ut.TestCase):
    def test_defaults(self):
        settings = enigma_factory.MachineSettings()
        self.assertEqual(settings.rotors, ('I', 'II', 'III'))
        self.assertEqual(settings.positions, (0, 0, 0))
        self.assertEqual(settings.plug_pairs, ())

    def test_normalisation(self):
        settings = enigma_factory.MachineSettings(rotors=['III', 'II', 'I'],
                                                  positions=['A', 'B', '3'],
                                                  ring_settings=[0, 'Z', 26],
                                                  plug_pairs=['AB', ('C', 'D')])
        self.assertEqual(settings.rotors, ('III', 'II', 'I'))
        self.assertEqual(settings.positions, (0, 1, 3))
        self.assertEqual(settings.ring_settings, (0, 25, 0))
        self.assertEqual(settings.plug_pairs, (('A', 'B'), ('C', 'D')))

    def test_wrong_counts(self):
        with self.assertRaises(enigma.ConfigurationError) as ctx:
            enigma_factory.MachineSettings(rotors=('I', 'II'))
        self.assertEqual(ctx.exception.kind, enigma.ErrorKind.ROTOR_COUNT)
        with self.assertRaises(enigma.ConfigurationError):
            enigma_factory.MachineSettings(positions=(0, 0, 0, 0))
        with self.assertRaises(enigma.ConfigurationError) as ctx:
            enigma_factory.MachineSettings(plug_pairs=('AB', 'CDE'))
        self.assertEqual(ctx.exception.kind, enigma.ErrorKind.PLUGBOARD)

    def test_build_machine(self):
        settings = enigma_factory.MachineSettings(positions=(0, 1, 2), plug_pairs=('AB', 'CD', 'EF'))
        machine = enigma_factory.build_machine(settings)
        self.assertEqual(machine.get_rotor_letters(), 'ABC')
        self.assertEqual(machine.get_plugboard_connections(), [('A', 'B'), ('C', 'D'), ('E', 'F')])
        self.assertEqual([rot.name for rot in machine.rotors], ['Rotor I', 'Rotor II', 'Rotor III'])
        self.assertEqual(machine.encrypt_char('H'), 'R')

        settings = enigma_factory.MachineSettings(plug_pairs=('AB', 'BC'))
        with self.assertRaises(enigma.ConfigurationError):
            enigma_factory.build_machine(settings)


if __name__ == "__main__":
    ut.main()
