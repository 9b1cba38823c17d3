"""
Option handlers turn the options that the caller provides into clauses that the MongoDB driver understands.

* `sort`: [Sort Option](#sort-option) determines the order of documents
* `select`: [Select Option](#select-option) selects the fields to be loaded
* `populate`: [Populate Option](#populate-option) loads referenced documents

Every handler accepts several syntaxes, so that the options can come right from a query string
or a JSON request body.
"""

from .base import OptionHandlerBase
from .sort import SortHandler
from .project import ProjectHandler
from .populate import PopulateHandler, PopulateParams, populate_documents
