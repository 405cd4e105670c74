"""Verbose-gated console logging shared by the core and the host shell."""

VERBOSE = False


def set_verbose(flag: bool) -> None:
    global VERBOSE
    VERBOSE = bool(flag)


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)
