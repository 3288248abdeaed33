from gettext import gettext as _

COMMAND_DESCRIPTION = _("List the available selectors")


def command(subparser):
    def handle(args):
        from shape_selectors.core.selectors import SELECTORS

        for name, cls in SELECTORS.items():
            print(f"{name}\t{cls.shape_type.value}")

    return handle
