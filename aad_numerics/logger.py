"""Contains the name of the logger used by aad_numerics modules.

``aad_numerics`` logs through the standard-library ``logging`` package and
never installs handlers itself. Messages are grouped by level:

* ``DEBUG``: progress of iterative algorithms (Newton-Raphson iterations,
  ODE steps, size of reverse-mode passes).
* ``WARNING``: something numerically unexpected happened, but a result was
  still produced (e.g. an integrand returned a non-finite value).
* ``ERROR``: an invalid argument was detected; an exception follows.

Calling applications configure output for
``aad_numerics.logger.aad_numerics_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "aad_numerics"
aad_numerics_logger = logging.getLogger(logger_name)
