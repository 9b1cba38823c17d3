"""
MongoPaginator paginates [mongoengine](http://mongoengine.org/) documents:
it loads a page of documents along with the total number of documents that match.

The main use case is the interaction with the UI:
every time a data grid needs a page of items, sorted and filtered, you won't have to count, skip
and limit by hand!

```python
from mongoengine import Document, StringField
from mongopaginator import PaginatorMixin

class Customer(PaginatorMixin, Document):
    paginator_options = dict(max_limit=100)

    name = StringField()

page = Customer.paginate({'name': {'$regex': '^Cust'}}, dict(page=2, limit=10, sort='name'))
page.total  # -> 42
page.limit  # -> 10
page.page  # -> 2
page.data  # -> [{'_id': ..., 'name': 'Customer 10'}, ...]
```

Aggregation pipelines are paginated as well: see `aggregate_paginated()`.
"""

# Exceptions that are used here and there
from .exc import *

# Options: how a call is configured
from .options import PaginationOptions, build_options
from .util import PaginatorSettingsDict

# The heart of MongoPaginator are the planners:
# that's where your options become counts, finds and pipelines
from .query import FindPlanner
from .aggregate import AggregatePlanner, PipelineStageSet, MIN_SERVER_VERSION
from .result import PagedResult, ResultChannel

# What the planners need from the database and the model
from .collection import DocumentCollection, MongoEngineCollection
from .schema import DocumentSchema

# Paginator binds them all together
from .paginator import Paginator

# Mixin for mongoengine documents that defines .paginate() and .aggregate_paginated() on it
from .me import PaginatorMixin

# Helpers
from . import handlers, converters
