from typing import *


class PaginatorSettingsDict(dict):
    """ Pagination options container.

        Is only used for nice autocompletion and documentation purposes only! :)

        Use it for model defaults (PaginatorMixin.paginator_options), or for call-time options.
        Keys that are left as `None` are treated as "not provided": when used as call-time options,
        they will be filled from the model defaults.
    """

    def __init__(self,
                 # --- slicing
                 limit: Union[int, Callable[[Optional[int]], int]] = None,
                 max_limit: int = None,
                 page: int = None,
                 # --- loading
                 lean: bool = None,
                 select: Union[str, list, dict, Callable] = None,
                 populate: Union[str, list, dict, Callable] = None,
                 sort: Union[str, list, dict, Callable] = None,
                 # --- converters
                 convert_sort: Callable = None,
                 convert_criteria: Callable = None,
                 criteria_wrapper: Callable = None,
                 ):
        """ Pagination options that control the way a page is loaded.

        Example:
            ```python
            from mongopaginator import PaginatorSettingsDict

            class Customer(PaginatorMixin, Document):
                paginator_options = PaginatorSettingsDict(
                    max_limit=100,
                    sort='-date',
                    criteria_wrapper=lambda criteria: {**criteria, 'deleted': False},
                )
            ```

        Args:
            limit (int | Callable): The page size.
                When not given, `max_limit` is used; when neither is given, all matching documents are loaded.
                A callable returns the page size; it receives `max_limit` if it accepts an argument.
            max_limit (int): The maximum page size.
                The user can never go any higher than that, and this value is used when no `limit` is given.
            page (int): The page number, 1-based. Defaults to `1`.
            lean (bool): Load plain dicts (`True`, the default) or `Document` objects (`False`).
            select (str | list | dict | Callable): Projection: the fields to load.
                Examples: `'name date'`, `'-password'`, `['name']`, `{'name': 1}`
            populate (str | list | dict | Callable): Referenced documents to load.
                Examples: `'created_by'`, `{'path': 'created_by', 'select': 'username'}`,
                `{'created_by': {'select': 'username'}}`
            sort (str | list | dict | Callable): Sorting.
                Examples: `'-date name'`, `[('date', -1)]`, `{'date': -1}`
            convert_sort (Callable): `convert_sort(sort, schema)`: converts the `sort` option into a MongoDB sort.
            convert_criteria (Callable): `convert_criteria(criteria, schema)`: converts the criteria
                (and every `$match` stage of a pipeline) into a MongoDB filter.
            criteria_wrapper (Callable): `criteria_wrapper(criteria)`: receives the converted criteria and
                returns the final filter. Use it to force some conditions onto every query.
        """
        super(PaginatorSettingsDict, self).__init__()
        self.update({k: v
                     for k, v in locals().items()
                     if k not in {'__class__', 'self'}})

    def and_more(self, **settings):
        """ Copy the object and add more settings to it """
        return self.__class__(**{**self, **settings})
