"""
milcheck normalizer: reattach spaced values to value-taking flags.

"--news 3" tokenizes to [Option(news, None), Argument("3")]; normalization fuses
the pair into Option(news, "3"). Only a literal Argument immediately after the
flag is taken. A value-taking flag followed by anything else (end of input,
another option, an unknown flag) keeps None, meaning "present, no value".

The pass reads its input once, front to back, and builds a new list; a fused
token is emitted as-is and never looked at again.
"""
from .logs import get_logger
from .tokens import Argument, Option

logger = get_logger(__name__)


def normalize(tokens):
    output = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if (
            isinstance(token, Option) and
            token.value is None and
            token.flag.takes_value and
            index < len(tokens) and
            isinstance(following := tokens[index], Argument)
        ):
            logger.debug("attaching %r to flag %r", following.text, token.flag.identifier)
            token = Option(token.flag, following.text)
            index += 1
        output.append(token)
    return output


__all__ = (
    "normalize",
)
