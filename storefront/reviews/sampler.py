import random
from typing import List, Optional, Sequence


def sample_reviews(texts: Sequence[str], limit: int = 20, rng: Optional[random.Random] = None) -> List[str]:
    """Permutation aléatoire uniforme (Fisher-Yates) puis préfixe d'au plus `limit` éléments."""
    shuffled = list(texts)
    (rng or random).shuffle(shuffled)
    return shuffled[:max(limit, 0)]
