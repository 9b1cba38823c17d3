"""
### Converters

Data grids usually send their filters and sorters as JSON lists:

```
GET /api/customer?filter=[{"property":"name","operator":"like","value":"3"}]&sort=[{"property":"name","direction":"DESC"}]
```

These converters turn them into MongoDB clauses:

```python
from mongopaginator.converters import filters_criteria, directions_sort

Customer.paginate(request.args['filter'], dict(
    sort=request.args['sort'],
    convert_criteria=filters_criteria,
    convert_sort=directions_sort,
))
```

Properties that the model does not have are ignored.
Any other value (e.g. a MongoDB filter) is returned unchanged, so that the converters are safe to use as defaults.
"""

import json
from collections import OrderedDict

from .exc import InvalidOptionError


def _comparison(operator):
    return lambda value: {operator: value}


#: Filter operators: operator name => function(value) that returns the condition
FILTER_OPERATORS = {
    'like': lambda value: {'$regex': str(value), '$options': 'i'},
    'eq': lambda value: value,
    'ne': _comparison('$ne'),
    'gt': _comparison('$gt'),
    'gte': _comparison('$gte'),
    'lt': _comparison('$lt'),
    'lte': _comparison('$lte'),
    'in': _comparison('$in'),
    'nin': _comparison('$nin'),
}

#: Sort directions
SORT_DIRECTIONS = {
    'ASC': 1,
    'DESC': -1,
}


def _load_json_list(value):
    """ Parse a JSON string ; return `None` if the value is not a list of objects """
    if isinstance(value, str) and value.lstrip().startswith('['):
        try:
            value = json.loads(value)
        except ValueError:
            return None

    if isinstance(value, list) and all(isinstance(item, dict) for item in value):
        return value
    return None


def _has_path(schema, name):
    return schema is None or schema.has_path(name)


def _stored_name(schema, name):
    """ Use the database name of a top-level field: `created_by` -> `createdBy` """
    return (schema.db_field(name) if schema is not None else None) or name


def _is_operators(condition):
    """ Test whether a condition is made of operators: {'$gte': 1, '$lte': 5} """
    return isinstance(condition, dict) and bool(condition) and all(k.startswith('$') for k in condition)


def _add_condition(result, key, condition):
    """ Add a condition on a field; never lose the conditions that are already there

        Operators are merged into one object: {'$gte': 1} + {'$lte': 5} -> {'$gte': 1, '$lte': 5}.
        Anything else goes into `$and`.
    """
    if key not in result:
        result[key] = condition
    elif _is_operators(result[key]) and _is_operators(condition) and not set(result[key]) & set(condition):
        result[key] = dict(result[key], **condition)
    else:
        result.setdefault('$and', []).append({key: condition})


def filters_criteria(criteria, schema=None):
    """ Convert a list of filters into MongoDB criteria

        Every filter is an object: {"property": "name", "operator": "like", "value": "3"}.
        When the operator is omitted, "eq" is used.
        Multiple filters on the same property all apply: e.g. "gte" and "lte" make a range.

    :param criteria: JSON string, or a list of filters; anything else is returned as it is
    :param schema: The schema to ignore unknown properties with
    :type schema: mongopaginator.schema.DocumentSchema | None
    :rtype: dict
    :raises InvalidOptionError: unknown operator
    """
    filters = _load_json_list(criteria)
    if filters is None:
        return criteria

    result = {}
    for f in filters:
        name = f.get('property')
        if not _has_path(schema, name):
            continue

        operator = f.get('operator') or 'eq'
        try:
            condition = FILTER_OPERATORS[operator]
        except KeyError:
            raise InvalidOptionError('criteria', 'unknown operator "{}" for "{}"'.format(operator, name))
        _add_condition(result, _stored_name(schema, name), condition(f.get('value')))
    return result


def directions_sort(sort, schema=None):
    """ Convert a list of sorters into a MongoDB sort

        Every sorter is an object: {"property": "name", "direction": "DESC"}.
        Directions are "ASC" and "DESC"; any other value is used as it is.

    :param sort: JSON string, or a list of sorters; anything else is returned as it is
    :param schema: The schema to ignore unknown properties with
    :type schema: mongopaginator.schema.DocumentSchema | None
    :rtype: OrderedDict
    """
    sorters = _load_json_list(sort)
    if sorters is None:
        return sort

    return OrderedDict(
        (_stored_name(schema, s.get('property')), SORT_DIRECTIONS.get(s.get('direction'), s.get('direction')))
        for s in sorters
        if _has_path(schema, s.get('property'))
    )
