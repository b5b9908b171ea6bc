import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    options = {}

    if url.get_backend_name() == 'sqlite':
        # Handlers run in a threadpool, so connections cross threads.
        options['connect_args'] = {'check_same_thread': False}
        if not url.database or url.database == ':memory:':
            options['poolclass'] = StaticPool

    return create_engine(database_url, **options)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def ensure_sqlite_directory(engine: Engine) -> None:
    url = engine.url
    if url.get_backend_name() != 'sqlite' or not url.database or url.database == ':memory:':
        return
    directory = os.path.dirname(url.database)
    if directory:
        os.makedirs(directory, exist_ok=True)
