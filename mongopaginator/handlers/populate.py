"""
### Populate Option

The `populate` option loads referenced documents and puts them in place of their ids.

Given a model like this:

```python
class Customer(PaginatorMixin, Document):
    name = StringField()
    created_by = ReferenceField(User, db_field='createdBy')
```

you can have every customer come with its user:

```python
Customer.paginate({}, dict(populate='created_by'))
# -> {'_id': ..., 'name': 'Customer 0', 'createdBy': {'_id': ..., 'username': 'test', ...}}
```

Referenced documents of a page are loaded with a single query per path.
A missing referenced document becomes `None`; in a list of references, missing documents are dropped.

#### Syntax

* String syntax: paths separated by whitespace

    ```python
    { 'populate': 'created_by tags' }
    ```

* Object syntax: a single populate with options

    ```python
    { 'populate': {'path': 'created_by', 'select': 'username', 'match': {'active': True}} }
    ```

    * `path`: the reference field (attribute name or database name)
    * `select`: projection for the referenced documents (see the `select` option)
    * `match`: additional filter for the referenced documents
    * `model`: the Document class (or its name) to load from.
        Only needed when the field does not declare it (e.g. a plain ObjectIdField)

* Mapping syntax: paths mapped to options

    ```python
    { 'populate': {'created_by': {'select': 'username'}, 'tags': None} }
    ```

* Array syntax: a list of strings or objects

Paths that are not references of the model are quietly ignored.
"""

import logging

from bson import DBRef
from mongoengine.base import get_document

from .base import OptionHandlerBase
from .project import ProjectHandler

logger = logging.getLogger(__name__)


class PopulateParams:
    """ Everything necessary to populate one path """

    __slots__ = ('path', 'field_name', 'db_field', 'document', 'select', 'match')

    def __init__(self, path, field_name, db_field, document, select=None, match=None):
        """ Values for a populate

        :param path: The path, as given by the user
        :param field_name: Attribute name of the reference field (for Document objects)
        :param db_field: Name the reference is stored under (for raw documents)
        :param document: Document class of the referenced documents
        :type document: type[mongoengine.Document]
        :param select: Compiled projection for referenced documents
        :type select: dict | None
        :param match: Additional criteria for referenced documents
        :type match: dict | None
        """
        self.path = path
        self.field_name = field_name
        self.db_field = db_field
        self.document = document
        self.select = select
        self.match = match or None

    def __repr__(self):
        return '{}({!r} -> {})'.format(self.__class__.__name__, self.path, self.document.__name__)


class PopulateHandler(OptionHandlerBase):
    """ Load referenced documents

        * None: nothing
        * 'a b': string of paths
        * {path: 'a', select: .., match: .., model: ..}
        * {a: {select: ..}, b: None}
        * ['a', {path: 'b', select: ..}]
    """

    option_name = 'populate'

    def __init__(self, schema=None):
        super(PopulateHandler, self).__init__(schema)

        # On input
        #: list of PopulateParams
        self.populates = []

    def input(self, spec):
        super(PopulateHandler, self).input(spec)
        self.populates = self._input(spec)
        return self

    def _input(self, spec):
        # Empty
        if not spec:
            return []

        # String syntax
        if isinstance(spec, str):
            spec = spec.split()

        # Object syntax, mapping syntax
        if isinstance(spec, dict):
            if 'path' in spec:
                spec = [spec]
            else:
                spec = [self._input_mapping_item(path, options) for path, options in spec.items()]

        # Array syntax
        if not isinstance(spec, (list, tuple)):
            raise self.invalid('must be one of: null, string, array, object; '
                               '{type} provided'.format(type=type(spec)))

        populates = []
        for item in spec:
            if isinstance(item, str):
                item = {'path': item}
            if not isinstance(item, dict) or not isinstance(item.get('path'), str):
                raise self.invalid('every populate must have a path; {item!r} provided'.format(item=item))

            # A single item may list multiple paths
            for path in item['path'].split():
                params = self._input_params(path, item)
                if params is not None:
                    populates.append(params)
        return populates

    def _input_mapping_item(self, path, options):
        if options is None:
            return {'path': path}
        if not isinstance(options, dict):
            raise self.invalid('options for "{path}" must be an object or null'.format(path=path))
        return dict(options, path=path)

    def _input_params(self, path, item):
        """ Make PopulateParams for a path, or `None` if the path can't be populated """
        # Target document
        document = item.get('model')
        if isinstance(document, str):
            document = get_document(document)

        # Field names
        if self.schema is not None:
            document = document or self.schema.reference_document(path)
            field_name = self.schema.field_name(path)
            db_field = self.schema.db_field(path)
        else:
            field_name = db_field = path

        if document is None or db_field is None:
            logger.debug('Not populating "%s" of %r: not a reference', path, self.schema)
            return None

        # Projection for the referenced documents
        select = ProjectHandler().input(item.get('select')).compile()

        return PopulateParams(path, field_name, db_field, document,
                              select=select,
                              match=item.get('match'))

    def compile(self):
        return self.populates


def populate_documents(docs, populates, instances=None):
    """ Load referenced documents and put them in place

    :param docs: Raw documents loaded from the database
    :type docs: list[dict]
    :param populates: Compiled populate option
    :type populates: list[PopulateParams]
    :param instances: Document objects built from `docs` (for non-lean queries).
        When given, referenced documents are set on them as Document objects; otherwise, `docs` are modified.
    :type instances: list[mongoengine.Document] | None
    :returns: `instances`, or `docs`
    """
    for params in populates:
        references = _load_references(params, docs)

        for i, doc in enumerate(docs):
            if params.db_field not in doc:
                continue
            value = _replace_references(doc[params.db_field], references)

            if instances is None:
                doc[params.db_field] = value
            else:
                setattr(instances[i], params.field_name, _as_documents(value, params.document))

    return docs if instances is None else instances


def _load_references(params, docs):
    """ Load the documents referenced by `docs`

    :returns: dict {id: referenced document}
    """
    # Collect ids
    ids = []
    for doc in docs:
        for ref in _iter_references(doc.get(params.db_field)):
            ref_id = _reference_id(ref)
            if ref_id is not None and ref_id not in ids:
                ids.append(ref_id)
    if not ids:
        return {}

    # Criteria
    criteria = {'_id': {'$in': ids}}
    if params.match:
        criteria = {'$and': [criteria, params.match]}

    # Projection. `_id` is required to put documents in place
    projection = params.select
    hide_id = bool(projection) and projection.get('_id') in (0, False)
    if hide_id:
        projection = {k: v for k, v in projection.items() if k != '_id'} or None

    logger.debug('Populating %s: %d documents', params, len(ids))
    references = {}
    for ref_doc in params.document._get_collection().find(criteria, projection):
        ref_id = ref_doc.pop('_id') if hide_id else ref_doc['_id']
        references[ref_id] = ref_doc
    return references


def _iter_references(value):
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return value
    return (value,)


def _reference_id(ref):
    """ Get the id from whatever a reference is stored as """
    if isinstance(ref, DBRef):
        return ref.id
    if isinstance(ref, dict):
        return ref.get('_id')
    return ref


def _replace_references(value, references):
    if isinstance(value, (list, tuple)):
        return [references[_reference_id(ref)]
                for ref in value
                if _reference_id(ref) in references]
    return references.get(_reference_id(value))


def _as_documents(value, document):
    """ Convert referenced documents into Document objects """
    if value is None:
        return None
    if isinstance(value, list):
        return [document._from_son(v) for v in value]
    return document._from_son(value)
