class BasePaginatorException(Exception):
    pass


class InvalidOptionError(BasePaginatorException):
    """ A pagination option could not be interpreted """

    def __init__(self, option: str, err: str):
        self.option = option

        super(InvalidOptionError, self).__init__(
            'Invalid "{option}" option: {err}'.format(option=option, err=err))


class InvalidPipelineStage(BasePaginatorException):
    """ A pipeline stage must be an object with exactly one operation key """

    def __init__(self, stage, index: int):
        self.stage = stage
        self.index = index

        super(InvalidPipelineStage, self).__init__(
            'Invalid pipeline specified: stage #{index} must have exactly one operation, '
            'got {stage!r}'.format(index=index, stage=stage))


class UnsupportedServerVersion(BasePaginatorException):
    """ The database server is too old for paginated aggregation """

    def __init__(self, version: str, required: tuple):
        self.version = version
        self.required = required

        super(UnsupportedServerVersion, self).__init__(
            'Unsupported MongoDb version: {version} (at least {required} is required)'.format(
                version=version,
                required='.'.join(map(str, required)))
        )
