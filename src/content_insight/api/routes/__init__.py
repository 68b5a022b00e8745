"""Route modules mounted by :func:`content_insight.api.main.create_app`."""
