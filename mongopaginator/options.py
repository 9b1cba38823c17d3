"""
### Pagination Options

Every call to `paginate()` or `aggregate_paginated()` accepts an options object.
Missing options are taken from the defaults configured on the model (see `PaginatorMixin.paginator_options`),
and then resolved into concrete values:

```python
Customer.paginate({'deleted': False}, dict(
    page=2,  # second page
    limit=20,  # 20 per page
    max_limit=100,  # the user can never go any higher than that
    sort='-date name',  # newest first, then by name
    select='name date',  # only load these fields
    populate='created_by',  # load the referenced user
    lean=True,  # plain dicts; `False` gives you Document objects
))
```

`limit`, `select`, `populate` and `sort` can also be given as callables that produce the value.
`limit` receives `max_limit`, if it accepts an argument; the others receive nothing.
A produced `limit` is then bounded by `max_limit` just like a literal one.

`convert_sort(sort, schema)`, `convert_criteria(criteria, schema)` and `criteria_wrapper(criteria)`
let you turn whatever your API receives into MongoDB clauses. See `mongopaginator.converters`.
"""

import inspect


def identity(value, schema=None):
    """ The default converter: returns the value unchanged """
    return value


class PaginationOptions:
    """ Fully resolved pagination options

        This object is built anew for every call by build_options()
    """

    __slots__ = ('limit', 'max_limit', 'page', 'skip', 'lean',
                 'select', 'populate', 'sort',
                 'convert_sort', 'convert_criteria', 'criteria_wrapper')

    def __init__(self, limit=None, max_limit=None, page=1, skip=0, lean=True,
                 select=None, populate=(), sort=None,
                 convert_sort=identity, convert_criteria=identity, criteria_wrapper=identity):
        #: Page size: a positive int, or `None` for "no limit"
        self.limit = limit
        #: Upper bound for the page size
        self.max_limit = max_limit
        #: Page number, 1-based
        self.page = page
        #: Number of records to skip: always consistent with `page` and `limit`
        self.skip = skip
        #: Load plain dicts (True) or Document objects (False)
        self.lean = lean

        self.select = select
        self.populate = populate
        self.sort = sort

        self.convert_sort = convert_sort
        self.convert_criteria = convert_criteria
        self.criteria_wrapper = criteria_wrapper

    def __repr__(self):
        return '{}(limit={!r}, page={!r}, skip={!r}, lean={!r}, select={!r}, populate={!r}, sort={!r})'.format(
            self.__class__.__name__,
            self.limit, self.page, self.skip, self.lean, self.select, self.populate, self.sort)


def merge_options(options=None, defaults=None) -> dict:
    """ Merge the caller's options with model defaults.

        Defaults only fill the keys that the caller has not provided (or has set to `None`):
        they never override an explicit value.
    """
    merged = dict(options or {})
    for key, value in (defaults or {}).items():
        if merged.get(key) is None:
            merged[key] = value
    return merged


def build_options(options=None, defaults=None) -> PaginationOptions:
    """ Resolve pagination options

    :param options: Options given by the caller
    :type options: dict | None
    :param defaults: Model-level default options
    :type defaults: dict | None
    :rtype: PaginationOptions
    """
    o = merge_options(options, defaults)

    # Limit
    limit = o.get('limit')
    max_limit = o.get('max_limit')
    if callable(limit):
        limit = _produce_limit(limit, max_limit)
    if not limit or limit < 0 or (max_limit and limit > max_limit):
        limit = max_limit
    limit = limit if limit and limit > 0 else None

    # Page, skip
    page = max(o.get('page') or 1, 1)
    skip = (page - 1) * (limit or 0)

    # Lean: plain dicts unless explicitly disabled
    lean = o.get('lean')
    lean = True if lean is None else bool(lean)

    return PaginationOptions(
        limit=limit,
        max_limit=max_limit,
        page=page,
        skip=skip,
        lean=lean,
        select=_produce(o.get('select')),
        populate=_produce(o.get('populate')) or [],
        sort=_produce(o.get('sort')),
        convert_sort=_converter(o.get('convert_sort')),
        convert_criteria=_converter(o.get('convert_criteria')),
        criteria_wrapper=_converter(o.get('criteria_wrapper')),
    )


def _produce(value):
    """ Invoke a producing function, or use the value as it is """
    return value() if callable(value) else value


def _produce_limit(func, max_limit):
    """ Invoke a limit function: `limit(max_limit)`, or `limit()` when it takes no arguments """
    try:
        inspect.signature(func).bind(max_limit)
    except TypeError:
        return func()
    except ValueError:
        pass  # no signature available
    return func(max_limit)


def _converter(func):
    return func if callable(func) else identity
