from ..exc import InvalidOptionError


class OptionHandlerBase:
    """ An implementation of a handler for a pagination option

        Every subclass handles a single option (`sort`, `select`, `populate`)
        and compiles it into something the MongoDB driver understands.
    """

    #: Name of the option that this object is capable of handling
    option_name = None

    def __init__(self, schema=None):
        """ Initialize the option handler with a schema.

        :param schema: Field information of the model being queried. May be absent.
        :type schema: mongopaginator.schema.DocumentSchema | None
        """
        self.schema = schema

    def input(self, value):
        """ Get the value of the option.

        Subclasses receive the input, validate it, and store it as public properties
        so that compile() can produce a clause.

        :raises InvalidOptionError
        :rtype: OptionHandlerBase
        """
        # Make sure that input() can only be used once
        self.input = self.__raise_input_not_reusable
        return self

    def __raise_input_not_reusable(self, *args, **kwargs):
        raise RuntimeError("You can't use the {}.input() method twice. "
                           "Create another handler!"
                           .format(self.__class__.__name__))

    def invalid(self, err):
        """ Make an error for this option """
        return InvalidOptionError(self.option_name, err)

    def compile(self):
        """ Compile the option into a driver clause """
        raise NotImplementedError()
