"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from treemirror import config as env
from treemirror.services.atomic_writer import AtomicFileWriter
from treemirror.services.fetcher import HttpServiceFetcher
from treemirror.services.http_service import HttpService
from treemirror.services.http_session import make_session
from treemirror.services.link_extractor import LinkExtractor
from treemirror.services.mirror_config_parser import MirrorConfigParser
from treemirror.services.mirror_executor import MirrorExecutor
from treemirror.services.symlink_mapper import SymlinkMapper


# Environment variables used by the container (read via `treemirror.config` helpers).
#
# USER_AGENT (str, default: "treemirror/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (float seconds, default: 30)
#   Connect/read timeout of every request; there is no other cancellation.
#
# TREEMIRROR_WORKERS (int, default: 1)
#   Maximum number of simultaneous in-flight requests. Also sizes the
#   connection pool of the shared session.
#
# TREEMIRROR_BIND_ADDRESS (str | optional)
#   Local IP address outgoing connections are bound to.
#
# TREEMIRROR_REPAIR_LINKS (bool, default: false)
#   Replace existing symlinks whose redirect target changed remotely.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.HTTP_TIMEOUT,
    "TREEMIRROR_WORKERS": env.workers(),
    "TREEMIRROR_BIND_ADDRESS": env.bind_address(),
    "TREEMIRROR_REPAIR_LINKS": env.repair_links(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for treemirror."""

    config = providers.Configuration(default=ENV)

    # One session for the whole process so connections are pooled
    http_session = providers.Singleton(
        make_session,
        bind_address=config.TREEMIRROR_BIND_ADDRESS,
        pool_maxsize=config.TREEMIRROR_WORKERS.as_(int),
    )

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=http_session.provided.get,
        timeout=config.HTTP_TIMEOUT.as_(float),
    )

    fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    link_extractor = providers.Singleton(LinkExtractor)

    atomic_writer = providers.Singleton(AtomicFileWriter)

    symlink_mapper = providers.Singleton(
        SymlinkMapper,
        repair_stale=config.TREEMIRROR_REPAIR_LINKS.as_(bool),
    )

    config_parser = providers.Singleton(MirrorConfigParser)

    mirror_executor = providers.Factory(
        MirrorExecutor,
        fetcher=fetcher,
        link_extractor=link_extractor,
        atomic_writer=atomic_writer,
        symlink_mapper=symlink_mapper,
    )
