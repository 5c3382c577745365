"""SQL Predicates - the fold's combinators over SQLAlchemy boolean expressions.

Invariants:
    - SQL_ANY_OF folds with or_ over false(); SQL_ALL_OF with and_ over true()
    - Nothing here touches a connection: the result is an expression tree that
      the caller hands to select().where()

Design Decisions:
    - SQLAlchemy's expression language is the deferred representation: the
      database evaluates the predicate, Python only builds it
    - or_/and_ drop a neutral false()/true() operand while constructing the
      clause list, so a folded filter renders without `0 = 1 OR ...` noise
"""

from sqlalchemy import ColumnElement, and_, false, or_, true

from dynquery.core.domain_types import MatchMode
from dynquery.core.predicate_fold import Combinator, select_combinator

SqlPredicate = ColumnElement[bool]


def sql_either(left: SqlPredicate, right: SqlPredicate) -> SqlPredicate:
    return or_(left, right)


def sql_both(left: SqlPredicate, right: SqlPredicate) -> SqlPredicate:
    return and_(left, right)


SQL_ANY_OF: Combinator[SqlPredicate] = Combinator("any", sql_either, false())
SQL_ALL_OF: Combinator[SqlPredicate] = Combinator("all", sql_both, true())


def sql_combinator(mode: MatchMode) -> Combinator[SqlPredicate]:
    return select_combinator(mode == MatchMode.ALL, SQL_ANY_OF, SQL_ALL_OF)
