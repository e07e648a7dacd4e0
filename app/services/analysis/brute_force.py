import logging
from typing import Callable, ClassVar, Iterator

from app.models.schemas import BruteForceResult, TransformPolicy
from app.services.engines.base import DEFAULT_POLICY
from app.services.engines.monoalphabetic.caesar import CaesarEngine
from app.services.languages.alphabets import Alphabet

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, BruteForceResult], None]


class BruteForceAttacker:
    """
    Exhaustive key search for the Caesar cipher.

    Every key 1..N-1 is tried. Candidates are scored by the share of words
    that contain one of the language's common short words, which is crude but
    works on short messages where letter frequencies say little.
    """

    LIKELY_THRESHOLD: ClassVar[float] = 0.6

    def __init__(self, alphabet: Alphabet, cipher: CaesarEngine | None = None):
        self.alphabet = alphabet
        self.cipher = cipher or CaesarEngine(alphabet)
        self.common_words = tuple(word.lower() for word in alphabet.common_words)

    @property
    def total_keys(self) -> int:
        return self.alphabet.size - 1

    def iter_attack(
        self,
        ciphertext: str,
        policy: TransformPolicy | None = None,
    ) -> Iterator[BruteForceResult]:
        """
        Lazily decrypt with each key in ascending order.

        Args:
            ciphertext: Text to attack
            policy: Output policy used for every decryption

        Yields:
            One BruteForceResult per key
        """
        policy = policy or DEFAULT_POLICY
        for key in range(1, self.alphabet.size):
            text = self.cipher.decrypt(ciphertext, key, policy)
            score = self.score_text(text)
            yield BruteForceResult(
                key=key,
                text=text,
                score=score,
                likely=score > self.LIKELY_THRESHOLD,
            )

    def attack(
        self,
        ciphertext: str,
        on_progress: ProgressCallback | None = None,
        policy: TransformPolicy | None = None,
    ) -> list[BruteForceResult]:
        """
        Try every key and rank the candidates.

        Args:
            ciphertext: Text to attack
            on_progress: Called as (key, total_keys, result) after each key
            policy: Output policy used for every decryption

        Returns:
            Results sorted by descending score; equal scores keep key order
        """
        results = []
        for result in self.iter_attack(ciphertext, policy):
            results.append(result)
            if on_progress is not None:
                on_progress(result.key, self.total_keys, result)

        # sorted() is stable, so ties stay in ascending key order
        ranked = sorted(results, key=lambda r: r.score, reverse=True)

        if ranked:
            logger.info(
                "Brute force over %s alphabet: best key %d (score %.2f), %d likely",
                self.alphabet.id,
                ranked[0].key,
                ranked[0].score,
                sum(1 for r in ranked if r.likely),
            )
        return ranked

    def score_text(self, text: str) -> float:
        """Fraction of whitespace-separated words containing a common word."""
        words = text.lower().split()
        if not words:
            return 0.0
        matches = sum(1 for word in words if any(common in word for common in self.common_words))
        return matches / len(words)
