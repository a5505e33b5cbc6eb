class TransactionStateError(RuntimeError):
    """ The shared transaction is used in a way its begin/commit bookkeeping does not allow """


class TransactionAlreadyFinalizedError(TransactionStateError):
    """ The outcome of the shared transaction has already been resolved """


class FinalizeError(Exception):
    """
    Commit or rollback of the shared transaction failed at scope end.
    The persisted state may be inconsistent, the original error is chained as __cause__.
    """
