"""Exception and warning types raised by gengamma."""


class InvalidParameterError(ValueError):
    """A parameter lies outside the domain of its parametrization."""


class UndefinedMomentWarning(RuntimeWarning):
    """A requested moment diverges for the current parameters.

    The moment method returns ``np.inf`` after emitting this warning. Turn
    it into an exception with
    ``warnings.simplefilter("error", UndefinedMomentWarning)``.
    """


__all__ = ["InvalidParameterError", "UndefinedMomentWarning"]
