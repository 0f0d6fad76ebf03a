"""
Extensions shipped with the framework.

Each module exposes its extension function as ``default``, so the module
itself can be passed to ``use``::

    from ignis.extensions import health
    app.use(health)
"""
