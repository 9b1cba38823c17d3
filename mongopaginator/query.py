import logging

from .handlers import SortHandler, ProjectHandler, PopulateHandler
from .result import PagedResult

logger = logging.getLogger(__name__)


class PlannerBase:
    """ Common things for planners: a collection to query, and a schema to give to the converters """

    def __init__(self, collection, schema=None):
        """ Init a planner

        :param collection: The database operations
        :type collection: mongopaginator.collection.DocumentCollection
        :param schema: Field information for converters
        :type schema: mongopaginator.schema.DocumentSchema | None
        """
        self.collection = collection
        self.schema = schema

    def convert_criteria(self, criteria, o):
        """ Convert raw criteria into the final MongoDB filter

        :type o: mongopaginator.options.PaginationOptions
        """
        return o.criteria_wrapper(o.convert_criteria(criteria, self.schema))

    def compile_sort(self, sort, o) -> SortHandler:
        """ Convert a raw sort, and parse it

        :type o: mongopaginator.options.PaginationOptions
        """
        return SortHandler(self.schema).input(o.convert_sort(sort, self.schema))


class FindPlanner(PlannerBase):
    """ Paginate with a count() and a find() """

    def execute(self, criteria, o) -> PagedResult:
        """ Load a page

        :param criteria: Raw criteria: anything that `convert_criteria` understands, or a function producing them
        :param o: Resolved options
        :type o: mongopaginator.options.PaginationOptions
        """
        if callable(criteria):
            criteria = criteria()

        # Convert
        criteria = self.convert_criteria(criteria, o)
        sort = self.compile_sort(o.sort, o).compile()

        # Count
        total = self.collection.count(criteria)
        logger.debug('Counted %d documents in %r matching %r', total, self.collection, criteria)
        if total <= 0:
            return PagedResult(total=0, limit=0, page=o.page, data=[])

        # Find
        docs = self.collection.find(
            criteria,
            projection=ProjectHandler(self.schema).input(o.select).compile(),
            populate=PopulateHandler(self.schema).input(o.populate).compile(),
            lean=o.lean,
            skip=o.skip,
            sort=sort or None,
            limit=o.limit if o.limit and o.limit > 0 else None,
        )
        return PagedResult(total=total, limit=o.limit or total, page=o.page, data=docs)
