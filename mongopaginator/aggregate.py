"""
### Paginated Aggregation

`aggregate_paginated()` runs your aggregation pipeline and paginates its output:

```python
Customer.aggregate_paginated([
    {'$match': {'deleted': False}},
    {'$project': {'name': 1, 'profit': 1}},
], dict(page=2, limit=10, sort='-profit'))
```

This is done in two runs:

1. The pipeline, followed by a `{'$count': 'total'}` stage, gives the total number of rows
2. The pipeline, followed by `$sort`, `$skip` and `$limit` stages, gives the page

`$sort`, `$skip` and `$limit` stages of your pipeline are taken out of it and put at the end,
where they override the `sort` option and the page slicing.
Every `$match` stage goes through the `convert_criteria` and `criteria_wrapper` options.

A pipeline that has its own `$count` stage is not paginated at all: it's run once, and its rows are returned as they are.

Requires MongoDB 3.4 or newer.
"""

import logging

from .exc import InvalidPipelineStage, UnsupportedServerVersion
from .query import PlannerBase
from .result import PagedResult
from .util import is_server_version_supported

logger = logging.getLogger(__name__)

#: The first version of MongoDB that supports the `$count` stage
MIN_SERVER_VERSION = (3, 4)


class PipelineStageSet:
    """ A pipeline, taken apart

        * `special`: the `$sort`, `$skip`, `$limit` stages. The last one of a kind wins.
        * `count_mode`: whether the pipeline has its own `$count` stage
        * `stages`: all the other stages, in their original order
    """

    #: Stages that are taken out of the pipeline and put at the end
    SPECIAL_STAGES = frozenset(('$sort', '$skip', '$limit'))

    __slots__ = ('special', 'count_mode', 'stages')

    def __init__(self):
        self.special = {}
        self.count_mode = False
        self.stages = []

    @classmethod
    def from_pipeline(cls, pipeline, convert_match=None):
        """ Take a pipeline apart

        :param pipeline: A list of stages, or a single stage
        :type pipeline: list[dict] | dict
        :param convert_match: A function to convert the condition of every `$match` stage
        :type convert_match: Callable | None
        :raises InvalidPipelineStage: a stage is not an object with exactly one key
        :rtype: PipelineStageSet
        """
        if isinstance(pipeline, dict):
            pipeline = [pipeline]

        stage_set = cls()
        for i, stage in enumerate(pipeline):
            if not isinstance(stage, dict) or len(stage) != 1:
                raise InvalidPipelineStage(stage, i)

            operation, = stage.keys()
            if operation in cls.SPECIAL_STAGES:
                stage_set.special[operation] = stage
                continue

            if operation == '$count':
                stage_set.count_mode = True
            elif operation == '$match' and convert_match is not None:
                stage = {'$match': convert_match(stage['$match'])}

            stage_set.stages.append(stage)
        return stage_set


class AggregatePlanner(PlannerBase):
    """ Paginate with an aggregation pipeline """

    def __init__(self, collection, schema=None, min_server_version=MIN_SERVER_VERSION):
        super(AggregatePlanner, self).__init__(collection, schema)
        self.min_server_version = tuple(min_server_version)

    def check_server_version(self):
        """ Make sure that the server can run our pipelines

        :raises UnsupportedServerVersion
        """
        version = self.collection.server_version()
        if not is_server_version_supported(version, self.min_server_version):
            raise UnsupportedServerVersion(version, self.min_server_version)

    def execute(self, pipeline, o):
        """ Run the pipeline, and paginate

        :param pipeline: A list of stages, or a single stage
        :type pipeline: list[dict] | dict
        :param o: Resolved options
        :type o: mongopaginator.options.PaginationOptions
        :returns: A page; or the raw rows if the pipeline has its own `$count`
        :rtype: PagedResult | list
        """
        self.check_server_version()

        stage_set = PipelineStageSet.from_pipeline(
            pipeline,
            convert_match=lambda condition: self.convert_criteria(condition, o))

        # The pipeline counts on its own
        if stage_set.count_mode:
            logger.debug('Aggregating %r: %r', self.collection, stage_set.stages)
            return self.collection.aggregate(stage_set.stages)

        # Count
        count_pipeline = stage_set.stages + [{'$count': 'total'}]
        logger.debug('Counting %r: %r', self.collection, count_pipeline)
        count_rows = self.collection.aggregate(count_pipeline)
        if not count_rows:
            return PagedResult(total=0, limit=o.limit or 0, page=o.page, data=count_rows)
        total = count_rows[0]['total']

        # Load the page
        data_pipeline = stage_set.stages + self.compile_page_stages(stage_set, o)
        logger.debug('Aggregating %r: %r', self.collection, data_pipeline)
        rows = self.collection.aggregate(data_pipeline)
        return PagedResult(total=total, limit=o.limit or total, page=o.page, data=rows)

    def compile_page_stages(self, stage_set, o) -> list:
        """ Make the `$sort`, `$skip`, `$limit` stages that go at the end of the pipeline

        Stages from the pipeline itself win over the options.

        :type stage_set: PipelineStageSet
        :type o: mongopaginator.options.PaginationOptions
        """
        stages = []

        # $sort
        if '$sort' in stage_set.special:
            sort_stage = self.compile_sort(stage_set.special['$sort']['$sort'], o).compile_stage()
        else:
            sort_stage = self.compile_sort(o.sort, o).compile_stage()
        if sort_stage is not None:
            stages.append(sort_stage)

        # $skip
        stages.append(stage_set.special.get('$skip') or {'$skip': o.skip})

        # $limit
        if '$limit' in stage_set.special:
            stages.append(stage_set.special['$limit'])
        elif o.limit:
            stages.append({'$limit': o.limit})

        return stages
