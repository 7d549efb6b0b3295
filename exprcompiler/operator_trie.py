"""A trie over a fixed alphabet, used to split runs of operator characters."""

from __future__ import annotations

from typing import Iterable, Optional


class _Node:
    __slots__ = ("children", "finish")

    def __init__(self) -> None:
        self.children: dict[str, _Node] = {}
        self.finish = False


class Trie:
    """A set of words over an alphabet with greedy longest-match splitting.

    When no alphabet is given it is deduced from the initial words.
    """

    def __init__(
        self,
        alphabet: Optional[Iterable[str]] = None,
        words: Iterable[str] = (),
    ) -> None:
        words = list(words)
        if alphabet is None:
            alphabet = {ch for word in words for ch in word}
        self.alphabet: tuple[str, ...] = tuple(sorted(set(alphabet)))
        self._letters = frozenset(self.alphabet)
        self._root = _Node()
        self.insert_many(words)

    def insert(self, word: str) -> None:
        """Add ``word``; every character must belong to the alphabet."""
        unknown = [ch for ch in word if ch not in self._letters]
        if unknown:
            raise ValueError(f"character {unknown[0]!r} is not in the trie alphabet")
        node = self._root
        for ch in word:
            node = node.children.setdefault(ch, _Node())
        node.finish = True

    def insert_many(self, words: Iterable[str]) -> None:
        """Add each word in ``words``."""
        for word in words:
            self.insert(word)

    def contains(self, word: str) -> bool:
        """Return whether ``word`` was inserted."""
        node = self._root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return False
        return node.finish

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def split_string(self, text: str) -> list[str]:
        """Greedily split ``text`` into words of the trie.

        Returns an empty list when the text cannot be split.
        """
        result: list[str] = []
        buffer: list[str] = []
        node = self._root
        for ch in text:
            if ch not in self._letters:
                return []
            nxt = node.children.get(ch)
            if nxt is None:
                if not node.finish:
                    return []
                result.append("".join(buffer))
                buffer.clear()
                nxt = self._root.children.get(ch)
                if nxt is None:
                    return []
            node = nxt
            buffer.append(ch)
        if not node.finish:
            return []
        if buffer:
            result.append("".join(buffer))
        return result