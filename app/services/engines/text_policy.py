from app.models.schemas import CaseHandling, NonAlphaHandling, TransformPolicy
from app.services.languages.alphabets import Alphabet


def render_letter(alphabet: Alphabet, index: int, was_upper: bool, policy: TransformPolicy) -> str:
    """Letter at ``index`` cased according to the policy."""
    if policy.case_handling == CaseHandling.UPPER:
        upper = True
    elif policy.case_handling == CaseHandling.LOWER:
        upper = False
    else:
        upper = was_upper
    return alphabet.letter(index, upper)


def render_non_letter(char: str, policy: TransformPolicy) -> str:
    """Output for a character outside the alphabet ("" when removed)."""
    if policy.non_alpha_handling == NonAlphaHandling.REMOVE:
        return ""
    if policy.non_alpha_handling == NonAlphaHandling.SPACE:
        return " "
    return char
