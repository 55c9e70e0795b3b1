"""
Content Tests

Run with: python -m pytest pymemfs/tests/test_content.py -v

Author: YSNRFD
Version: 1.0.0
"""

import sys
import unittest


class TestContent(unittest.TestCase):
    """Test the file content buffer."""

    def test_write_appends(self):
        """Writes always go to the end."""
        from pymemfs.filesystem.content import Content

        content = Content()
        self.assertEqual(content.write('foo'), 3)
        content.read(1)
        content.write('bar')

        self.assertEqual(str(content), 'foobar')
        self.assertEqual(content.size, 6)
        self.assertEqual(len(content), 6)

    def test_write_converts_objects(self):
        from pymemfs.filesystem.content import Content

        content = Content()
        content.write(42)
        content << 'x' << 7

        self.assertEqual(str(content), '42x7')

    def test_read_advances_cursor(self):
        from pymemfs.filesystem.content import Content

        content = Content('hello world')

        self.assertEqual(content.read(5), 'hello')
        self.assertEqual(content.pos, 5)
        self.assertEqual(content.read(), ' world')

    def test_read_at_end(self):
        """read() at the end gives '' and read(n) gives None."""
        from pymemfs.filesystem.content import Content

        content = Content('abc')
        content.read()

        self.assertEqual(content.read(), '')
        self.assertIsNone(content.read(1))

    def test_read_zero_before_end(self):
        from pymemfs.filesystem.content import Content

        content = Content('abc')

        self.assertEqual(content.read(0), '')
        self.assertEqual(content.pos, 0)

    def test_read_negative_length(self):
        from pymemfs.filesystem.content import Content
        from pymemfs.exceptions import InvalidArgumentError

        with self.assertRaises(InvalidArgumentError):
            Content('abc').read(-1)

    def test_truncate(self):
        from pymemfs.filesystem.content import Content
        from pymemfs.exceptions import InvalidArgumentError

        content = Content('abcdef')
        content.read()
        content.truncate(2)

        self.assertEqual(str(content), 'ab')
        self.assertEqual(content.pos, 2)

        content.truncate(10)
        self.assertEqual(str(content), 'ab')

        with self.assertRaises(InvalidArgumentError):
            content.truncate(-1)

    def test_puts(self):
        """puts adds exactly one newline per line."""
        from pymemfs.filesystem.content import Content

        content = Content()
        content.puts('one', 'two\n', 3)

        self.assertEqual(str(content), 'one\ntwo\n3\n')

    def test_lines_and_readline(self):
        from pymemfs.filesystem.content import Content

        content = Content('a\nb\nc')

        self.assertEqual(list(content.lines()), ['a\n', 'b\n', 'c'])
        self.assertEqual(content.readline(), 'a\n')
        self.assertEqual(content.readline(), 'b\n')
        self.assertEqual(content.readline(), 'c')
        self.assertEqual(content.readline(), '')

    def test_clear(self):
        from pymemfs.filesystem.content import Content

        content = Content('data')
        content.read(2)
        content.clear()

        self.assertEqual(str(content), '')
        self.assertEqual(content.pos, 0)


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
