import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

# bcrypt and psycopg2 ship compiled wheels; poetry's cache may hold one
# built for another interpreter.
_COMPILED = ["psycopg2-binary", "bcrypt"]


def _install(session: nox.Session) -> None:
    """Install welwexpress and its test extra into the session."""
    session.run("poetry", "install", "--extras", "test", external=True)
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_COMPILED)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Whole suite, every supported interpreter."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Aggregate rules only; runs without a web app or providers."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_api(session: nox.Session) -> None:
    """HTTP endpoints, then the order payment scenarios."""
    _install(session)
    session.run("pytest", "-m", "integration", *session.posargs)
    session.run("pytest", "tests/ordering/bdd/")

