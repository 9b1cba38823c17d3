from .handlers import populate_documents


class DocumentCollection:
    """ The database operations that the Paginator relies on

        Subclass it to paginate something other than a mongoengine document.
        Any error raised by these methods is given to the caller as it is.
    """

    def count(self, criteria) -> int:
        """ Count the documents matching the criteria

        :param criteria: MongoDB filter
        :type criteria: dict
        """
        raise NotImplementedError()

    def find(self, criteria, projection=None, populate=(), lean=True, skip=0, sort=None, limit=None) -> list:
        """ Load documents

        :param criteria: MongoDB filter
        :type criteria: dict
        :param projection: MongoDB projection, or `None` for all fields
        :type projection: dict | None
        :param populate: References to load
        :type populate: list[mongopaginator.handlers.PopulateParams]
        :param lean: Return plain dicts (True), or Document objects (False)
        :param skip: The number of documents to skip
        :param sort: List of (field, direction) pairs, or `None` to use the natural order
        :type sort: list | None
        :param limit: The maximum number of documents, or `None` for no limit
        :type limit: int | None
        """
        raise NotImplementedError()

    def aggregate(self, pipeline) -> list:
        """ Run an aggregation pipeline and get all the resulting rows

        :type pipeline: list[dict]
        """
        raise NotImplementedError()

    def server_version(self) -> str:
        """ Get the version of the database server, e.g. '3.4.10' """
        raise NotImplementedError()


class MongoEngineCollection(DocumentCollection):
    """ Collection of a mongoengine Document, queried with pymongo """

    def __init__(self, document):
        """ Init the collection

        :param document: The mongoengine document class
        :type document: type[mongoengine.Document]
        """
        self.document = document

    @property
    def collection(self):
        """ Get the pymongo collection

        :rtype: pymongo.collection.Collection
        """
        return self.document._get_collection()

    def count(self, criteria) -> int:
        return self.collection.count_documents(criteria or {})

    def find(self, criteria, projection=None, populate=(), lean=True, skip=0, sort=None, limit=None) -> list:
        cursor = self.collection.find(criteria or {}, projection).skip(skip or 0)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        docs = list(cursor)

        # Lean: plain dicts
        if lean:
            return populate_documents(docs, populate) if populate else docs

        # Document objects
        instances = [self.document._from_son(doc) for doc in docs]
        if populate:
            populate_documents(docs, populate, instances)
        return instances

    def aggregate(self, pipeline) -> list:
        return list(self.collection.aggregate(pipeline))

    def server_version(self) -> str:
        return self.collection.database.command('buildInfo')['version']

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, self.document.__name__)
