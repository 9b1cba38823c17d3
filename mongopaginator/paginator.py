import logging

from .aggregate import AggregatePlanner, MIN_SERVER_VERSION
from .options import build_options
from .query import FindPlanner
from .result import ResultChannel

logger = logging.getLogger(__name__)


class Paginator:
    """ Paginate documents of a collection

        Example:

            paginator = Paginator(MongoEngineCollection(Customer), DocumentSchema(Customer), dict(max_limit=100))
            page = paginator.paginate({'deleted': False}, dict(page=2, limit=10, sort='name'))
            page.total  # -> 5
            page.data  # -> [{...}, ...]

        Every operation accepts an optional callback, `callback(error, result)`,
        which is invoked with the same outcome as the one the operation returns or raises.
        Errors raised by the callback are logged; they never replace that outcome.
    """

    def __init__(self, collection, schema=None, default_options=None, min_server_version=MIN_SERVER_VERSION):
        """ Init a paginator

        :param collection: The database operations
        :type collection: mongopaginator.collection.DocumentCollection
        :param schema: Field information; given to converters
        :type schema: mongopaginator.schema.DocumentSchema | None
        :param default_options: Options to use when the caller does not provide them
        :type default_options: dict | mongopaginator.PaginatorSettingsDict | None
        :param min_server_version: The minimal MongoDB version that aggregate_paginated() would run on
        :type min_server_version: tuple
        """
        self.collection = collection
        self.schema = schema
        self.default_options = default_options or {}
        self.min_server_version = min_server_version

    def paginate(self, criteria=None, options=None, callback=None):
        """ Load a page of documents matching the criteria

        :param criteria: MongoDB filter; or anything that the `convert_criteria` option understands
        :param options: Pagination options. See PaginatorSettingsDict.
            Can be the callback, when there are no options.
        :type options: dict | Callable | None
        :param callback: `callback(error, result)`
        :type callback: Callable | None
        :rtype: mongopaginator.PagedResult
        :raises mongopaginator.exc.BasePaginatorException
        :raises pymongo.errors.PyMongoError
        """
        options, callback = self._options_and_callback(options, callback)
        return self._run(
            lambda o: FindPlanner(self.collection, self.schema).execute(criteria, o),
            options, callback)

    def aggregate_paginated(self, pipeline, options=None, callback=None):
        """ Run an aggregation pipeline and load a page of its results

        :param pipeline: A list of stages, or a single stage
        :type pipeline: list[dict] | dict
        :param options: Pagination options. See PaginatorSettingsDict.
            Can be the callback, when there are no options.
        :type options: dict | Callable | None
        :param callback: `callback(error, result)`
        :type callback: Callable | None
        :returns: A page; or a list of raw rows, when the pipeline has its own `$count` stage
        :rtype: mongopaginator.PagedResult | list
        :raises mongopaginator.exc.UnsupportedServerVersion
        :raises mongopaginator.exc.InvalidPipelineStage
        :raises pymongo.errors.PyMongoError
        """
        options, callback = self._options_and_callback(options, callback)
        return self._run(
            lambda o: AggregatePlanner(self.collection, self.schema, self.min_server_version).execute(pipeline, o),
            options, callback)

    @staticmethod
    def _options_and_callback(options, callback):
        """ paginate(criteria, callback) is the same as paginate(criteria, None, callback) """
        if callable(options) and callback is None:
            return None, options
        return options, callback

    def _run(self, plan, options, callback):
        """ Run a planner and deliver its outcome to both the callback and the caller """
        channel = ResultChannel(callback)
        try:
            result = plan(build_options(options, self.default_options))
        except Exception as e:
            logger.debug('Pagination failed on %r: %r', self.collection, e)
            channel.reject(e)
        else:
            channel.resolve(result)
        return channel.result()
