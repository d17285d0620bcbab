"""Runtime type checking shared by every module of the package.

Physical inputs are annotated ``float``. The implicit numeric tower of
PEP 484 lets an ``int`` through wherever a ``float`` is declared, so
``thermal_rating(env, drake, 100)`` is checked the same as ``100.0``.
"""

from beartype import BeartypeConf
from beartype import beartype as _beartype

beartype = _beartype(conf=BeartypeConf(is_pep484_tower=True))
