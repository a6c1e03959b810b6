from .Backend import backend


def random_permutation_(items):
    """
    Shuffle a mutable sequence in place (Fisher-Yates) and return it.
    Walks r from the last position down to 1, swapping items[r] with a
    uniformly drawn items[index], index in [0, r].
    """
    for r in range(len(items) - 1, 0, -1):
        index = int(backend.random.randint(0, r + 1))
        items[r], items[index] = items[index], items[r]
    return items


def random_permutation(items):
    # int -> permutation of range(n); anything else is copied first
    if isinstance(items, int):
        return random_permutation_(list(range(items)))
    return random_permutation_(list(items))
