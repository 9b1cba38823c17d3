"""
### Select Option

The `select` option picks the fields to be loaded (in MongoDB terminology: a *projection*).

You do this by either listing the fields that you need (*include mode*), or listing the fields that you
*do not* need (*exclude mode*). `_id` is always loaded unless excluded explicitly.

#### Syntax

* String syntax

    Field names separated by whitespace. A `-` prefix excludes a field.

    ```python
    { 'select': 'name date' }  # only load `name` and `date`
    { 'select': '-password' }  # load everything but `password`
    ```

* Array syntax.

    ```python
    { 'select': ['name', 'date'] }
    ```

* Object syntax

    Given to MongoDB as it is.

    ```python
    { 'select': {'name': 1, 'date': 1} }
    ```

Selecting a field that does not exist gives you documents that only have an `_id`.
"""

from .base import OptionHandlerBase


class ProjectHandler(OptionHandlerBase):
    """ MongoDB projection

        * None, '', []: all fields
        * 'a b -c': string of '[+|-]<field>'
        * ['a', 'b']
        * {a: 1, b: 0}
    """

    option_name = 'select'

    def __init__(self, schema=None):
        super(ProjectHandler, self).__init__(schema)

        # On input
        #: dict() of a projection: {field: 0|1}, or `None` for all fields
        self.projection = None

    def input(self, projection):
        super(ProjectHandler, self).input(projection)
        self.projection = self._input(projection)
        return self

    def _input(self, projection):
        # Empty projection: all fields
        if not projection:
            return None

        # String syntax
        if isinstance(projection, str):
            projection = projection.split()

        # Array syntax
        if isinstance(projection, (list, tuple)):
            if not all(isinstance(name, str) for name in projection):
                raise self.invalid('list items must be field names')
            projection = dict(self._input_name(name) for name in projection)

        # Dict syntax
        if not isinstance(projection, dict):
            raise self.invalid('must be one of: null, string, array, object; '
                               '{type} provided'.format(type=type(projection)))

        return projection

    @staticmethod
    def _input_name(name):
        """ Convert '-field' into (field, 0) and '+field' into (field, 1) """
        if name[:1] == '-':
            return name[1:], 0
        if name[:1] == '+':
            return name[1:], 1
        return name, 1

    def compile(self):
        """ Compile into a projection for Collection.find() """
        return self.projection
