"""Core of resultflow: the Result primitives and the layers built on them.

- ``result_primitives``: Success, Failure, Unit and the synchronous combinators
- ``lifting``: adapters turning raising functions into Result-returning ones
- ``async_result``: the same combinators over pending Results
- ``collection``: predicates, projections and aggregation over many Results
"""
