"""Default diagnostics sink.

Anything in this package that needs to tell the user about a
recoverable problem calls a `report(message)` function. Unless the
caller supplies its own, `report` below is used, which issues an
`AutomatonWarning`.

"""

import warnings


class AutomatonWarning(UserWarning):
    pass


def report(message):
    warnings.warn(message, AutomatonWarning, stacklevel=3)


def reporter(report_func=None):
    if report_func is None:
        return report
    return report_func
