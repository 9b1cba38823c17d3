from .collection import MongoEngineCollection
from .paginator import Paginator
from .schema import DocumentSchema


class PaginatorMixin:
    """ Mixin for mongoengine documents that provides the .paginate() and .aggregate_paginated() methods

        Example:

            class Customer(PaginatorMixin, Document):
                paginator_options = dict(max_limit=100)

                name = StringField()

            Customer.paginate({'name': 'Customer 1'}, dict(page=1, limit=10))
    """

    #: Default pagination options for this model. See PaginatorSettingsDict
    paginator_options = None

    # Override this method in your subclass in order to configure the Paginator on a per-model basis!
    @classmethod
    def _init_paginator(cls, default_options: dict = None) -> Paginator:
        """ Get a Paginator for this model. Is only invoked once.

            Override this method in order to initialize the Paginator the way you need.
            For example, you might want to paginate with a custom DocumentCollection.

            :rtype: Paginator
        """
        if default_options is None:
            default_options = cls.paginator_options
        return Paginator(MongoEngineCollection(cls), DocumentSchema(cls), default_options)

    __paginator_per_class_cache = {}

    @classmethod
    def _get_paginator(cls) -> Paginator:
        """ Get the Paginator for this model ; initialize it only once """
        try:
            # Every model class has its own Paginator, and no one inherits it.
            return cls.__paginator_per_class_cache[cls]
        except KeyError:
            cls.__paginator_per_class_cache[cls] = paginator = cls._init_paginator()
            return paginator

    @classmethod
    def paginator_configure(cls, default_options: dict) -> Paginator:
        """ Initialize this model's Paginator with the given default options and make it permanent.

            This method is just a shortcut to do configuration the lazy way.
            A better way would be to set `paginator_options`, or override _init_paginator().

            :param default_options: dict of options. See PaginatorSettingsDict
        """
        cls.__paginator_per_class_cache[cls] = paginator = cls._init_paginator(default_options)
        return paginator

    @classmethod
    def paginate(cls, criteria=None, options=None, callback=None):
        """ Load a page of documents. See Paginator.paginate()

        :rtype: mongopaginator.PagedResult
        """
        return cls._get_paginator().paginate(criteria, options, callback)

    @classmethod
    def aggregate_paginated(cls, pipeline, options=None, callback=None):
        """ Run an aggregation pipeline and load a page of its rows. See Paginator.aggregate_paginated()

        :rtype: mongopaginator.PagedResult | list
        """
        return cls._get_paginator().aggregate_paginated(pipeline, options, callback)
