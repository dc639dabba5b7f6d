import typing


def english_enumerate(items: typing.Iterable[str], conj: str = ", and ") -> str:
    """
    Joins names the way they read in an English sentence:
    ``a``, ``a, and b``, ``a, b, and c``.
    """
    names = list(items)
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + conj + names[-1]
