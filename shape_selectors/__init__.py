import shape_selectors.utils.i18n  # noqa:F401
