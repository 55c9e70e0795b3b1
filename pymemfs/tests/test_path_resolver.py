"""
Path Resolver Tests

Run with: python -m pytest pymemfs/tests/test_path_resolver.py -v

Author: YSNRFD
Version: 1.0.0
"""

import sys
import unittest


class TestPathResolver(unittest.TestCase):
    """Test path string manipulation."""

    def test_normalize(self):
        from pymemfs.filesystem.path_resolver import PathResolver

        self.assertEqual(PathResolver.normalize('/home/../tmp/.'), '/tmp')
        self.assertEqual(PathResolver.normalize('/../x'), '/x')
        self.assertEqual(PathResolver.normalize('a/../../b'), '../b')
        self.assertEqual(PathResolver.normalize('//a///b/'), '/a/b')
        self.assertEqual(PathResolver.normalize('.'), '.')

    def test_join(self):
        from pymemfs.filesystem.path_resolver import PathResolver

        self.assertEqual(PathResolver.join('/home', 'user'), '/home/user')
        self.assertEqual(PathResolver.join('/a/', '/b'), '/a/b')
        self.assertEqual(PathResolver.join('', 'b'), 'b')

    def test_dirname(self):
        from pymemfs.filesystem.path_resolver import PathResolver

        self.assertEqual(PathResolver.dirname('/home/user/file.txt'), '/home/user')
        self.assertEqual(PathResolver.dirname('/a'), '/')
        self.assertEqual(PathResolver.dirname('/'), '/')
        self.assertEqual(PathResolver.dirname('file'), '.')
        self.assertEqual(PathResolver.dirname('/a/b/'), '/a')

    def test_basename(self):
        from pymemfs.filesystem.path_resolver import PathResolver

        self.assertEqual(PathResolver.basename('/home/user/file.txt'), 'file.txt')
        self.assertEqual(PathResolver.basename('/a/b/'), 'b')
        self.assertEqual(PathResolver.basename('/'), '/')
        self.assertEqual(PathResolver.basename('/a/b.rb', '.rb'), 'b')
        self.assertEqual(PathResolver.basename('/a/b.tar.gz', '.*'), 'b.tar')

    def test_extname(self):
        from pymemfs.filesystem.path_resolver import PathResolver

        self.assertEqual(PathResolver.extname('/a/b.tar.gz'), '.gz')
        self.assertEqual(PathResolver.extname('.profile'), '')
        self.assertEqual(PathResolver.extname('name.'), '')
        self.assertEqual(PathResolver.extname('plain'), '')

    def test_split_and_is_absolute(self):
        from pymemfs.filesystem.path_resolver import PathResolver

        self.assertEqual(PathResolver.split('/a/b'), ('/a', 'b'))
        self.assertTrue(PathResolver.is_absolute('/a'))
        self.assertFalse(PathResolver.is_absolute('a'))


class TestFnmatch(unittest.TestCase):
    """Test glob pattern matching."""

    def test_star_with_pathname(self):
        from pymemfs.filesystem.path_resolver import PathResolver, GlobFlag

        self.assertTrue(PathResolver.fnmatch('*.rb', 'a.rb', GlobFlag.PATHNAME))
        self.assertFalse(PathResolver.fnmatch('*', 'a/b', GlobFlag.PATHNAME))
        self.assertTrue(PathResolver.fnmatch('*', 'a/b'))

    def test_double_star(self):
        from pymemfs.filesystem.path_resolver import PathResolver, GlobFlag

        flags = GlobFlag.PATHNAME
        self.assertTrue(PathResolver.fnmatch('**/*.rb', 'a/b/c.rb', flags))
        self.assertTrue(PathResolver.fnmatch('**/*.rb', 'c.rb', flags))
        self.assertTrue(PathResolver.fnmatch('/**/f', '/a/b/f', flags))
        self.assertFalse(PathResolver.fnmatch('/**/f', '/a/b/g', flags))

    def test_leading_dot(self):
        from pymemfs.filesystem.path_resolver import PathResolver, GlobFlag

        self.assertFalse(PathResolver.fnmatch('*', '.hidden', GlobFlag.PATHNAME))
        self.assertTrue(PathResolver.fnmatch('*', '.hidden', GlobFlag.PATHNAME | GlobFlag.DOTMATCH))
        self.assertTrue(PathResolver.fnmatch('.*', '.hidden', GlobFlag.PATHNAME))

    def test_question_mark_and_classes(self):
        from pymemfs.filesystem.path_resolver import PathResolver, GlobFlag

        self.assertTrue(PathResolver.fnmatch('?x', 'ax'))
        self.assertFalse(PathResolver.fnmatch('?', '/', GlobFlag.PATHNAME))
        self.assertTrue(PathResolver.fnmatch('[a-c]x', 'bx'))
        self.assertFalse(PathResolver.fnmatch('[!a]x', 'ax'))
        self.assertTrue(PathResolver.fnmatch('[^a]x', 'bx'))
        self.assertTrue(PathResolver.fnmatch('[x', '[x'))

    def test_braces(self):
        from pymemfs.filesystem.path_resolver import PathResolver, GlobFlag

        self.assertTrue(PathResolver.fnmatch('{a,b}.txt', 'b.txt', GlobFlag.EXTGLOB))
        self.assertFalse(PathResolver.fnmatch('{a,b}.txt', 'c.txt', GlobFlag.EXTGLOB))
        self.assertFalse(PathResolver.fnmatch('{a,b}.txt', 'a.txt'))
        self.assertTrue(PathResolver.fnmatch('x{a,{b,c}}', 'xc', GlobFlag.EXTGLOB))

    def test_escapes(self):
        from pymemfs.filesystem.path_resolver import PathResolver, GlobFlag

        self.assertTrue(PathResolver.fnmatch('\\*', '*'))
        self.assertFalse(PathResolver.fnmatch('\\*', 'x'))
        self.assertTrue(PathResolver.fnmatch('\\*', '\\x', GlobFlag.NOESCAPE))

    def test_casefold(self):
        from pymemfs.filesystem.path_resolver import PathResolver, GlobFlag

        self.assertFalse(PathResolver.fnmatch('A.TXT', 'a.txt'))
        self.assertTrue(PathResolver.fnmatch('A.TXT', 'a.txt', GlobFlag.CASEFOLD))

    def test_glob_filter_keeps_order(self):
        from pymemfs.filesystem.path_resolver import PathResolver

        paths = ['/c', '/a', '/b']
        self.assertEqual(PathResolver.glob_filter(['/a', '/c'], paths), ['/c', '/a'])


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
