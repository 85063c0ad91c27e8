"""Quire — content-collection routing and navigation for Markdown docs sites.

Walks a tree of frontmatter-annotated Markdown files, validates their
metadata, derives a canonical route for each, and assembles the ordered
sidebar tree a renderer draws.

Quick start::

    import quire

    result = quire.check("my-site/")
    result.ok                      # single pass/fail verdict
    result.documents["guides/kotlin"].body
    result.navigation.to_dict()

Three modes::

    quire.check("my-site/")        # Validate only
    quire.build("my-site/")        # Validate and write routes/navigation JSON
    quire.watch("my-site/")        # Rebuild on every change

Pipeline::

    Loader -> Validator -> Route Resolver -> Navigation Tree Builder

"""

__version__ = "0.1.0"
__all__ = [
    "BuildResult",
    "QuireConfig",
    "__version__",
    "build",
    "check",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import quire`` fast while providing a clean top-level API.
    """
    if name == "QuireConfig":
        from quire.config import QuireConfig

        return QuireConfig

    if name == "BuildResult":
        from quire.pipeline import BuildResult

        return BuildResult

    if name == "build":
        from quire.app import build

        return build

    if name == "check":
        from quire.app import check

        return check

    if name == "watch":
        from quire.app import watch

        return watch

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
