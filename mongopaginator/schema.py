from mongoengine.errors import LookUpError
from mongoengine.fields import ReferenceField, LazyReferenceField, CachedReferenceField, ListField


class DocumentSchema:
    """ Field information about a mongoengine Document

        Converters receive it as their `schema` argument, so that they can ignore fields the model does not have:

            def convert_criteria(criteria, schema):
                return {k: v for k, v in criteria.items() if schema.has_path(k)}
    """

    #: Field classes that reference other documents
    REFERENCE_FIELDS = (ReferenceField, LazyReferenceField, CachedReferenceField)

    def __init__(self, document):
        """ Init the schema

        :param document: The mongoengine document class
        :type document: type[mongoengine.Document]
        """
        self.document = document

    @property
    def name(self):
        """ The name of the document class """
        return self.document.__name__

    def path(self, name):
        """ Get the field for a (possibly dotted) path

            Both attribute names and database field names are accepted: 'created_by', 'createdBy', '_id'.

        :param name: Field name or path
        :type name: str
        :returns: The field, or `None` when the document has no such path
        :rtype: mongoengine.base.BaseField | None
        """
        if not name or not isinstance(name, str):
            return None

        parts = name.split('.')
        parts[0] = getattr(self.document, '_reverse_db_field_map', {}).get(parts[0], parts[0])

        try:
            fields = self.document._lookup_field(parts)
        except LookUpError:
            return None
        return fields[-1] if fields else None

    def has_path(self, name) -> bool:
        """ Check whether the document has the field """
        return self.path(name) is not None

    __contains__ = has_path

    def field_name(self, name):
        """ Get the attribute name for a top-level field given by either of its names """
        field = self.path(name)
        return field.name if field is not None and '.' not in name else None

    def db_field(self, name):
        """ Get the name that the field is stored under """
        field = self.path(name)
        return field.db_field if field is not None and '.' not in name else None

    def reference_document(self, name):
        """ Get the Document class that a reference field points to

            Works for references and lists of references.

        :rtype: type[mongoengine.Document] | None
        """
        field = self.path(name)
        if isinstance(field, ListField):
            field = field.field
        if isinstance(field, self.REFERENCE_FIELDS):
            return field.document_type
        return None

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, self.name)
