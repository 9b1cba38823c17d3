"""
### Sort Option

The `sort` option determines the order of documents on every page.

An example of a sort option would look like this:

```python
# sort by age, descending;
# then sort by first name, alphabetically
Customer.paginate({}, dict(sort='-age first_name'))
```

#### Syntax

* String syntax

    List of field names separated by whitespace, optionally prefixed by the sort direction:
    `-` for descending, `+` for ascending. The default is ascending.

    ```python
    { 'sort': '-age +first_name last_name' }
    ```

* Array syntax.

    A list of such strings, or a list of `(field, direction)` pairs.

    ```python
    { 'sort': ['-age', 'first_name'] }
    { 'sort': [('age', -1), ('first_name', 1)] }
    ```

* Object syntax

    A dict of field names mapped to directions.
    Directions are: `1`, `-1`, `'asc'`, `'ascending'`, `'desc'`, `'descending'`, or a `{'$meta': ...}` object.

    ```python
    { 'sort': {'age': -1, 'first_name': 1} }
    ```

Fields that the model does not have are given to MongoDB anyway: it sorts missing fields as nulls.
"""

from collections import OrderedDict

from .base import OptionHandlerBase


class SortHandler(OptionHandlerBase):
    """ MongoDB sorting

        * None: no sorting
        * '-a b': string of '[+|-]<field>'. default direction = +1
        * [ '-a', 'b' ], [ ('a', -1), ('b', 1) ]
        * { a: -1, b: +1 }
    """

    option_name = 'sort'

    #: Named directions
    DIRECTIONS = {
        1: 1, -1: -1,
        'asc': 1, 'ascending': 1,
        'desc': -1, 'descending': -1,
    }

    def __init__(self, schema=None):
        super(SortHandler, self).__init__(schema)

        # On input
        #: OrderedDict() of a sort spec: {field: +1|-1|{'$meta': ...}}
        self.sort_spec = None

    def input(self, sort_spec):
        super(SortHandler, self).input(sort_spec)
        self.sort_spec = self._input(sort_spec)
        return self

    def _input(self, spec):
        # Empty
        if not spec:
            return OrderedDict()

        # String syntax
        if isinstance(spec, str):
            spec = spec.split()

        # List
        if isinstance(spec, (list, tuple)):
            spec = OrderedDict(self._input_list_item(item) for item in spec)

        # Dict
        if not isinstance(spec, dict):
            raise self.invalid('must be either a list, a string, or an object; {type} provided.'
                               .format(type=type(spec)))

        # Validate directions
        return OrderedDict((field, self._direction(field, direction))
                           for field, direction in spec.items())

    def _input_list_item(self, item):
        """ Convert '-field' or ('field', -1) into a (field, direction) pair """
        if isinstance(item, str):
            if item[:1] in {'+', '-'}:
                return item[1:], -1 if item[0] == '-' else +1
            return item, +1
        if isinstance(item, (list, tuple)) and len(item) == 2:
            return tuple(item)
        raise self.invalid('list items must be either "[+-]field" strings or (field, direction) pairs; '
                           '{item!r} provided'.format(item=item))

    def _direction(self, field, direction):
        if isinstance(direction, dict) and '$meta' in direction:
            return direction
        if isinstance(direction, str):
            direction = direction.lower()
        try:
            return self.DIRECTIONS[direction]
        except (KeyError, TypeError):
            raise self.invalid('direction for "{field}" can be either +1 or -1; {direction!r} provided'
                               .format(field=field, direction=direction))

    def compile(self):
        """ Compile into a list of (field, direction) pairs for Cursor.sort() """
        return list(self.sort_spec.items())

    def compile_stage(self):
        """ Compile into a `$sort` pipeline stage

        :returns: The stage, or `None` when there's no sorting
        """
        if not self.sort_spec:
            return None
        return {'$sort': OrderedDict(self.sort_spec)}
