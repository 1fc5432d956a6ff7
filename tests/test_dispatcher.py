#!/usr/bin/env python3
"""
Tests for command dispatch and the built-in commands.

All tests run against a VirtualSystem, so no real process is spawned and
the test runner's working directory is never changed.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

from minish.builtins import Builtin, CommandResult
from minish.dispatcher import CommandDispatcher, SPAWN_FAILURE_STATUS
from minish.system import VirtualSystem


def make_system():
    system = VirtualSystem(cwd='/home/user', env={'PATH': '/usr/bin:/bin', 'HOME': '/home/user'})
    system.mkdir('/home/user/projects')
    system.mkdir('/tmp')
    system.write('/home/user/notes.txt', 'hello\n')
    system.add_program('/usr/bin/ls')
    system.add_program('/bin/false', lambda args: 1)
    return system


class TestBuiltinRegistry(unittest.TestCase):
    """Test the closed set of built-ins."""

    def test_names(self):
        """Test exactly the five built-ins exist."""
        self.assertEqual({b.value for b in Builtin}, {'exit', 'echo', 'type', 'pwd', 'cd'})

    def test_lookup(self):
        """Test lookup by command name."""
        self.assertIs(Builtin.lookup('cd'), Builtin.CD)
        self.assertIsNone(Builtin.lookup('ls'))
        self.assertIsNone(Builtin.lookup('CD'))

    def test_every_builtin_has_handler(self):
        """Test each member is runnable."""
        for builtin in Builtin:
            with self.subTest(builtin=builtin):
                self.assertTrue(callable(builtin.handler))


class TestDispatch(unittest.TestCase):
    """Test routing between built-ins and external programs."""

    def setUp(self):
        """Set up test fixtures."""
        self.system = make_system()
        self.dispatcher = CommandDispatcher(self.system)

    def test_builtin_not_resolved(self):
        """Test built-ins run even when a program of the same name exists."""
        self.system.add_program('/usr/bin/echo')
        result = self.dispatcher.dispatch(['echo', 'hi'])
        self.assertEqual(result.text, 'hi')
        self.assertEqual(self.system.spawned, [])

    def test_external_program(self):
        """Test a program on PATH is spawned with its arguments."""
        result = self.dispatcher.dispatch(['ls', '-la', '/tmp'])
        self.assertEqual(self.system.spawned, [('/usr/bin/ls', ['-la', '/tmp'])])
        self.assertEqual(result.exit_code, 0)
        self.assertIsNone(result.text)
        self.assertFalse(result.terminate)

    def test_external_status_reported(self):
        """Test the child status is carried in the result."""
        result = self.dispatcher.dispatch(['false'])
        self.assertEqual(result.exit_code, 1)
        self.assertFalse(result.terminate)

    def test_command_not_found(self):
        """Test unknown commands are reported and do not terminate."""
        result = self.dispatcher.dispatch(['foobarbaz'])
        self.assertEqual(result.text, 'Command foobarbaz not found')
        self.assertEqual(result.exit_code, 127)
        self.assertFalse(result.terminate)

    def test_spawn_failure_is_not_fatal(self):
        """Test a resolved but unrunnable program is reported."""
        self.system.write('/usr/bin/broken', 'not a program')
        result = self.dispatcher.dispatch(['broken'])
        self.assertEqual(result.text, 'broken: failed to execute: Permission denied')
        self.assertEqual(result.exit_code, SPAWN_FAILURE_STATUS)
        self.assertFalse(result.terminate)

    def test_empty_tokens_rejected(self):
        """Test dispatching nothing is a programming error."""
        with self.assertRaises(ValueError):
            self.dispatcher.dispatch([])


class TestExit(unittest.TestCase):
    """Test the exit built-in."""

    def setUp(self):
        """Set up test fixtures."""
        self.dispatcher = CommandDispatcher(make_system())

    def test_no_arguments(self):
        """Test plain exit terminates with status 0 silently."""
        result = self.dispatcher.dispatch(['exit'])
        self.assertTrue(result.terminate)
        self.assertEqual(result.exit_code, 0)
        self.assertIsNone(result.text)

    def test_with_code(self):
        """Test exit with a status prints a confirmation."""
        result = self.dispatcher.dispatch(['exit', '42'])
        self.assertTrue(result.terminate)
        self.assertEqual(result.exit_code, 42)
        self.assertEqual(result.text, 'Exited with code 42')

    def test_signed_codes(self):
        """Test explicit signs are accepted."""
        self.assertEqual(self.dispatcher.dispatch(['exit', '-1']).exit_code, -1)
        self.assertEqual(self.dispatcher.dispatch(['exit', '+3']).exit_code, 3)

    def test_too_many_arguments(self):
        """Test two arguments is an error and does not exit."""
        result = self.dispatcher.dispatch(['exit', '1', '2'])
        self.assertFalse(result.terminate)
        self.assertEqual(result.text, 'Error: exit takes 1 argument but got 2')

    def test_non_numeric(self):
        """Test a non-integer argument is reported, not fatal."""
        for arg in ['abc', '1.5', '', '4 2', '1_000']:
            with self.subTest(arg=arg):
                result = self.dispatcher.dispatch(['exit', arg])
                self.assertFalse(result.terminate)
                self.assertEqual(result.text, f'exit: {arg}: numeric argument required')


class TestEchoAndPwd(unittest.TestCase):
    """Test echo and pwd."""

    def setUp(self):
        """Set up test fixtures."""
        self.system = make_system()
        self.dispatcher = CommandDispatcher(self.system)

    def test_echo_joins_arguments(self):
        """Test arguments are joined by single spaces."""
        self.assertEqual(self.dispatcher.dispatch(['echo', 'a', 'b', 'c']).text, 'a b c')

    def test_echo_keeps_quotes(self):
        """Test echo prints tokens verbatim."""
        self.assertEqual(self.dispatcher.dispatch(['echo', '"a b"']).text, '"a b"')

    def test_echo_no_arguments(self):
        """Test bare echo prints an empty line."""
        self.assertEqual(self.dispatcher.dispatch(['echo']).text, '')

    def test_pwd(self):
        """Test pwd prints the working directory."""
        self.assertEqual(self.dispatcher.dispatch(['pwd']).text, '/home/user')


class TestType(unittest.TestCase):
    """Test the type built-in."""

    def setUp(self):
        """Set up test fixtures."""
        self.dispatcher = CommandDispatcher(make_system())

    def test_builtin(self):
        """Test built-ins are reported as such."""
        self.assertEqual(self.dispatcher.dispatch(['type', 'echo']).text, 'echo is a shell builtin')

    def test_external(self):
        """Test programs are reported with their path."""
        self.assertEqual(self.dispatcher.dispatch(['type', 'ls']).text, 'ls is /usr/bin/ls')

    def test_not_found(self):
        """Test unknown names are reported."""
        result = self.dispatcher.dispatch(['type', 'nonexistent_cmd_xyz'])
        self.assertEqual(result.text, 'type: nonexistent_cmd_xyz: not found')
        self.assertEqual(result.exit_code, 1)

    def test_multiple_arguments(self):
        """Test a miss does not abort the remaining names."""
        result = self.dispatcher.dispatch(['type', 'cd', 'nope', 'ls', 'exit'])
        self.assertEqual(result.text.splitlines(), [
            'cd is a shell builtin',
            'type: nope: not found',
            'ls is /usr/bin/ls',
            'exit is a shell builtin',
        ])

    def test_no_arguments(self):
        """Test type without names prints nothing."""
        result = self.dispatcher.dispatch(['type'])
        self.assertIsNone(result.text)
        self.assertEqual(result.exit_code, 0)


class TestCd(unittest.TestCase):
    """Test the cd built-in."""

    def setUp(self):
        """Set up test fixtures."""
        self.system = make_system()
        self.dispatcher = CommandDispatcher(self.system)

    def pwd(self) -> str:
        return self.dispatcher.dispatch(['pwd']).text

    def test_absolute(self):
        """Test cd to an absolute directory."""
        result = self.dispatcher.dispatch(['cd', '/tmp'])
        self.assertIsNone(result.text)
        self.assertEqual(self.pwd(), '/tmp')

    def test_relative(self):
        """Test cd relative to the working directory."""
        self.dispatcher.dispatch(['cd', 'projects'])
        self.assertEqual(self.pwd(), '/home/user/projects')
        self.dispatcher.dispatch(['cd', '..'])
        self.assertEqual(self.pwd(), '/home/user')

    def test_tilde(self):
        """Test a leading ~ is replaced by HOME."""
        self.dispatcher.dispatch(['cd', '/tmp'])
        self.dispatcher.dispatch(['cd', '~'])
        self.assertEqual(self.pwd(), '/home/user')
        self.dispatcher.dispatch(['cd', '~/projects'])
        self.assertEqual(self.pwd(), '/home/user/projects')

    def test_missing_directory(self):
        """Test a missing target leaves the directory unchanged."""
        result = self.dispatcher.dispatch(['cd', '/nonexistent'])
        self.assertEqual(result.text, 'cd: /nonexistent: No such file or directory')
        self.assertFalse(result.terminate)
        self.assertEqual(self.pwd(), '/home/user')

    def test_message_names_original_argument(self):
        """Test the error shows the argument as typed, before ~ expansion."""
        result = self.dispatcher.dispatch(['cd', '~/missing'])
        self.assertEqual(result.text, 'cd: ~/missing: No such file or directory')

    def test_file_target(self):
        """Test cd to a regular file fails."""
        result = self.dispatcher.dispatch(['cd', 'notes.txt'])
        self.assertEqual(result.text, 'cd: notes.txt: No such file or directory')
        self.assertEqual(self.pwd(), '/home/user')

    def test_argument_count(self):
        """Test cd requires exactly one argument."""
        self.assertEqual(self.dispatcher.dispatch(['cd']).text, 'cd: expected 1 argument but got 0')
        self.assertEqual(self.dispatcher.dispatch(['cd', 'a', 'b']).text,
                         'cd: expected 1 argument but got 2')

    def test_home_unset(self):
        """Test ~ without HOME is reported."""
        del self.system.env['HOME']
        self.assertEqual(self.dispatcher.dispatch(['cd', '~']).text, 'cd: HOME not set')
        self.assertEqual(self.pwd(), '/home/user')

    def test_type_after_cd_uses_new_directory(self):
        """Test relative program names follow the working directory."""
        self.system.add_program('/tmp/run.sh')
        self.dispatcher.dispatch(['cd', '/tmp'])
        self.assertEqual(self.dispatcher.dispatch(['type', './run.sh']).text,
                         './run.sh is /tmp/run.sh')


class TestCommandResult(unittest.TestCase):
    """Test CommandResult defaults."""

    def test_defaults(self):
        """Test an empty result."""
        result = CommandResult()
        self.assertIsNone(result.text)
        self.assertEqual(result.exit_code, 0)
        self.assertFalse(result.terminate)
        self.assertEqual(str(result), '')


if __name__ == '__main__':
    unittest.main()
