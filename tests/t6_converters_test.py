import unittest
from collections import OrderedDict

from mongopaginator import DocumentSchema
from mongopaginator.converters import filters_criteria, directions_sort
from mongopaginator.exc import InvalidOptionError
from .models import Customer


class ConvertersTest(unittest.TestCase):
    """ Test data grid converters """

    def test_filters_criteria(self):
        schema = DocumentSchema(Customer)

        # === Test: operators
        self.assertEqual(filters_criteria('[{"property": "name", "operator": "like", "value": "3"}]', schema),
                         {'name': {'$regex': '3', '$options': 'i'}})
        self.assertEqual(filters_criteria([{'property': 'name', 'value': 'Customer 1'}], schema),
                         {'name': 'Customer 1'})
        self.assertEqual(filters_criteria([
            {'property': 'profit', 'operator': 'gte', 'value': 10},
            {'property': 'deleted', 'operator': 'ne', 'value': True},
            {'property': 'name', 'operator': 'in', 'value': ['a', 'b']},
        ], schema), {
            'profit': {'$gte': 10},
            'deleted': {'$ne': True},
            'name': {'$in': ['a', 'b']},
        })

        # === Test: database names
        self.assertEqual(filters_criteria([{'property': 'created_by', 'value': 1}], schema), {'createdBy': 1})

        # === Test: unknown properties are ignored
        self.assertEqual(filters_criteria([{'property': 'xxx', 'value': 1}, {'property': 'name', 'value': 'a'}], schema),
                         {'name': 'a'})

        # === Test: without a schema, everything goes
        self.assertEqual(filters_criteria([{'property': 'xxx', 'value': 1}]), {'xxx': 1})

        # === Test: anything else is returned unchanged
        for criteria in (None, {'name': 'a'}, 'Customer 1', '[not json', [1, 2]):
            self.assertEqual(filters_criteria(criteria, schema), criteria)

        # === Test: multiple filters on the same property: a range
        self.assertEqual(filters_criteria('[{"property": "profit", "operator": "gte", "value": 2},'
                                          ' {"property": "profit", "operator": "lte", "value": 5}]', schema),
                         {'profit': {'$gte': 2, '$lte': 5}})

        # === Test: multiple filters on the same property: equality goes into $and
        self.assertEqual(filters_criteria([
            {'property': 'name', 'value': 'a'},
            {'property': 'name', 'operator': 'ne', 'value': 'b'},
        ], schema), {'name': 'a', '$and': [{'name': {'$ne': 'b'}}]})

        # === Test: multiple filters on the same property: same operators go into $and
        self.assertEqual(filters_criteria([
            {'property': 'name', 'operator': 'like', 'value': 'Cust'},
            {'property': 'name', 'operator': 'like', 'value': '3'},
            {'property': 'created_by', 'operator': 'ne', 'value': 1},
            {'property': 'created_by', 'operator': 'ne', 'value': 2},
        ], schema), {
            'name': {'$regex': 'Cust', '$options': 'i'},
            'createdBy': {'$ne': 1},
            '$and': [
                {'name': {'$regex': '3', '$options': 'i'}},
                {'createdBy': {'$ne': 2}},
            ],
        })

        # === Test: unknown operator
        with self.assertRaises(InvalidOptionError) as e:
            filters_criteria([{'property': 'name', 'operator': 'between', 'value': 1}], schema)
        self.assertEqual(e.exception.option, 'criteria')

    def test_directions_sort(self):
        schema = DocumentSchema(Customer)

        sort = directions_sort('[{"property": "name", "direction": "DESC"}, {"property": "date", "direction": "ASC"}]',
                               schema)
        self.assertIsInstance(sort, OrderedDict)
        self.assertEqual(list(sort.items()), [('name', -1), ('date', 1)])

        # Database names, unknown properties, other directions
        sort = directions_sort([
            {'property': 'created_by', 'direction': 'DESC'},
            {'property': 'xxx', 'direction': 'DESC'},
            {'property': 'profit', 'direction': -1},
        ], schema)
        self.assertEqual(list(sort.items()), [('createdBy', -1), ('profit', -1)])

        # Anything else is returned unchanged
        for value in (None, '-name', {'name': -1}, ['-name']):
            self.assertEqual(directions_sort(value, schema), value)
