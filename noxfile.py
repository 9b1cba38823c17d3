import nox.sessions

PYTHON_VERSIONS = ['3.8', '3.9', '3.10', '3.11']
MONGOENGINE_VERSIONS = [
    *(f'0.{x}.0' for x in range(20, 1 + 27)),
]


nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = [
    'tests',
    'tests_mongoengine',
]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.sessions.Session, mongoengine=None):
    """ Run all tests """
    session.install('-e', '.[test]')

    # Specific package versions
    if mongoengine:
        session.install(f'mongoengine=={mongoengine}')

    # Test
    session.run('pytest', 'tests/', '--cov=mongopaginator')


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize('mongoengine', MONGOENGINE_VERSIONS)
def tests_mongoengine(session: nox.sessions.Session, mongoengine):
    """ Test against a specific MongoEngine version """
    tests(session, mongoengine)
