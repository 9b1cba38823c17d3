import unittest

from mongopaginator import build_options, PaginatorSettingsDict
from mongopaginator.options import identity, merge_options


class OptionsTest(unittest.TestCase):
    """ Test option normalization """

    def test_defaults(self):
        """ No options at all """
        o = build_options()
        self.assertEqual(o.limit, None)
        self.assertEqual(o.max_limit, None)
        self.assertEqual(o.page, 1)
        self.assertEqual(o.skip, 0)
        self.assertEqual(o.lean, True)
        self.assertEqual(o.select, None)
        self.assertEqual(o.populate, [])
        self.assertEqual(o.sort, None)
        self.assertIs(o.convert_sort, identity)
        self.assertIs(o.convert_criteria, identity)
        self.assertIs(o.criteria_wrapper, identity)

        # Same with explicit `None`s
        o = build_options(None, None)
        self.assertEqual((o.limit, o.page, o.skip), (None, 1, 0))

    def test_merge(self):
        """ Model defaults never override the caller """
        defaults = dict(limit=10, max_limit=50, sort='name', lean=False)

        self.assertEqual(merge_options(dict(limit=5), defaults),
                         dict(limit=5, max_limit=50, sort='name', lean=False))
        # `None` means "not provided"
        self.assertEqual(merge_options(dict(limit=None, sort='-date'), defaults),
                         dict(limit=10, max_limit=50, sort='-date', lean=False))
        # Falsy values are still values
        self.assertEqual(merge_options(dict(lean=True), dict(lean=False))['lean'], True)
        self.assertEqual(build_options(dict(lean=False), dict(lean=True)).lean, False)

        # Settings dict: its `None`s are filled from the defaults
        o = build_options(PaginatorSettingsDict(page=2), PaginatorSettingsDict(limit=10, sort='name'))
        self.assertEqual((o.limit, o.page, o.skip, o.sort), (10, 2, 10, 'name'))

        # Input is not modified
        options = dict(page=2)
        build_options(options, defaults)
        self.assertEqual(options, dict(page=2))

    def test_limit(self):
        """ Limit resolution against max_limit """
        limit = lambda **kw: build_options(kw).limit

        # limit only
        self.assertEqual(limit(limit=3), 3)
        # max_limit only
        self.assertEqual(limit(max_limit=8), 8)
        # limit <= max_limit
        self.assertEqual(limit(limit=2, max_limit=4), 2)
        self.assertEqual(limit(limit=4, max_limit=4), 4)
        # limit > max_limit
        self.assertEqual(limit(limit=5, max_limit=4), 4)
        # Zero and negative limits are "not set"
        self.assertEqual(limit(limit=0), None)
        self.assertEqual(limit(limit=0, max_limit=4), 4)
        self.assertEqual(limit(limit=-1), None)
        self.assertEqual(limit(limit=-1, max_limit=4), 4)

        # Limit from model defaults
        self.assertEqual(build_options(dict(page=2), dict(limit=10)).limit, 10)
        self.assertEqual(build_options(dict(limit=100), dict(max_limit=10)).limit, 10)

    def test_limit_function(self):
        """ limit() receives max_limit """
        received = []

        def limit(max_limit):
            received.append(max_limit)
            return 3

        o = build_options(dict(limit=limit, max_limit=8))
        self.assertEqual(o.limit, 3)
        self.assertEqual(received, [8])

        # Without max_limit
        self.assertEqual(build_options(dict(limit=lambda max_limit: 3)).limit, 3)
        # Nothing reasonable: no limit
        self.assertEqual(build_options(dict(limit=lambda max_limit: max_limit)).limit, None)

        # A function without arguments works like the value it produces
        for max_limit in (None, 4, 1):
            self.assertEqual(build_options(dict(limit=lambda: 2, max_limit=max_limit)).limit,
                             build_options(dict(limit=2, max_limit=max_limit)).limit,
                             max_limit)
        self.assertEqual(build_options(dict(limit=lambda: 2, page=3)).skip, 4)

        # Optional argument: max_limit is given
        self.assertEqual(build_options(dict(limit=lambda max_limit=None: max_limit or 7, max_limit=5)).limit, 5)
        # Produced values are bounded by max_limit
        self.assertEqual(build_options(dict(limit=lambda: 10, max_limit=4)).limit, 4)

    def test_page_and_skip(self):
        """ page defaults to 1, skip follows page & limit """
        o = build_options(dict(page=3, limit=2))
        self.assertEqual((o.page, o.skip), (3, 4))

        o = build_options(dict(page=1, limit=2))
        self.assertEqual((o.page, o.skip), (1, 0))

        # No limit: nothing to skip
        o = build_options(dict(page=3))
        self.assertEqual((o.page, o.skip), (3, 0))

        # max_limit is the page size
        o = build_options(dict(page=2, max_limit=8))
        self.assertEqual((o.page, o.skip), (2, 8))

        # Falsy and negative pages
        for page in (None, 0, -5):
            o = build_options(dict(page=page, limit=10))
            self.assertEqual((o.page, o.skip), (1, 0), page)

    def test_lean(self):
        self.assertEqual(build_options(dict(lean=None)).lean, True)
        self.assertEqual(build_options(dict(lean=True)).lean, True)
        self.assertEqual(build_options(dict(lean=False)).lean, False)

    def test_producing_functions(self):
        """ select, populate, sort: values or functions """
        o = build_options(dict(select='name', populate='created_by', sort='-name'))
        self.assertEqual((o.select, o.populate, o.sort), ('name', 'created_by', '-name'))

        o = build_options(dict(select=lambda: 'name', populate=lambda: 'created_by', sort=lambda: '-name'))
        self.assertEqual((o.select, o.populate, o.sort), ('name', 'created_by', '-name'))

        # A function that produces nothing
        o = build_options(dict(populate=lambda: None))
        self.assertEqual(o.populate, [])

    def test_converters(self):
        """ Non-callable converters become identity """
        convert = lambda value, schema: value + '!'
        wrap = lambda criteria: dict(criteria, deleted=False)

        o = build_options(dict(convert_sort=convert, convert_criteria=convert, criteria_wrapper=wrap))
        self.assertIs(o.convert_sort, convert)
        self.assertIs(o.convert_criteria, convert)
        self.assertIs(o.criteria_wrapper, wrap)

        o = build_options(dict(convert_sort='nope', convert_criteria=1, criteria_wrapper={}))
        self.assertIs(o.convert_sort, identity)
        self.assertIs(o.convert_criteria, identity)
        self.assertIs(o.criteria_wrapper, identity)

        # identity() works with one and two arguments
        self.assertEqual(identity({'a': 1}), {'a': 1})
        self.assertEqual(identity({'a': 1}, object()), {'a': 1})

    def test_unknown_options(self):
        """ Unknown options are ignored """
        o = build_options(dict(limit=2, whatever=1))
        self.assertEqual(o.limit, 2)
        self.assertFalse(hasattr(o, 'whatever'))

    def test_settings_dict(self):
        """ PaginatorSettingsDict has all the keys """
        s = PaginatorSettingsDict(limit=10)
        self.assertEqual(s['limit'], 10)
        self.assertIn('criteria_wrapper', s)
        self.assertIsNone(s['max_limit'])

        s2 = s.and_more(max_limit=20)
        self.assertEqual((s2['limit'], s2['max_limit']), (10, 20))
        self.assertIsNone(s['max_limit'])  # not modified
        self.assertIsInstance(s2, PaginatorSettingsDict)
