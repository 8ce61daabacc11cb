r"""
milcheck tokenizer: raw arguments → initial token list.

One left-to-right pass over the argument strings (program path already removed):

    argument            action
    "-"                 Argument("-")
    "--"                stop accepting options; emits nothing
    "--name[=value]"    long-flag path (while options are accepted)
    "-xyz"              short-cluster path (while options are accepted)
    anything else       Argument(text), verbatim

Long-flag path
- "--name=value" splits at the first '='; "--name" has no value.
- unknown name → UnknownLongFlag(name)
- known name, flag takes no value or the value is empty → Option(flag, None)
  (an empty "--name=" is dropped silently, it is not an error)
- known name, value-taking flag, non-empty value → Option(flag, value)

Short-cluster path
- each character is looked up in turn:
  • a presence-only flag → Option(flag, None), keep scanning
  • a value-taking flag with characters after it → Option(flag, rest) and the
    argument is done; "-f-h" is one token, the "-h" is never read as a flag
  • a value-taking flag as the last character → Option(flag, None)
  • anything else → UnknownShortFlag(character), keep scanning

The tokenizer never raises on any input; unrecognized spellings are tokens.
"""
from .tokens import Argument, Option, UnknownLongFlag, UnknownShortFlag


def _tokenize_long(table, argument, tokens):
    name, separator, value = argument[2:].partition("=")
    flag = table.find_long(name)
    if flag is None:
        tokens.append(UnknownLongFlag(name))
    elif not flag.takes_value or not value:
        tokens.append(Option(flag))
    else:
        tokens.append(Option(flag, value))


def _tokenize_cluster(table, argument, tokens):
    cluster = argument[1:]
    for index, character in enumerate(cluster):
        flag = table.find_short(character)
        if flag is None:
            tokens.append(UnknownShortFlag(character))
        elif not flag.takes_value:
            tokens.append(Option(flag))
        elif rest := cluster[index + 1:]:
            # the remainder is the value, verbatim
            tokens.append(Option(flag, rest))
            break
        else:
            tokens.append(Option(flag))


def tokenize(arguments, table):
    """
    classify raw argument strings against a flag table.

    parameters
    - arguments: Iterable[str]
      the invocation without the program path.
    - table: FlagTable
      declared flags; lookups use first-match-wins in registration order.

    returns
    - list[Token] in input order.
    """
    tokens = []
    accept = True
    for argument in arguments:
        if argument == "-":
            tokens.append(Argument(argument))
        elif argument == "--":
            accept = False
        elif accept and len(argument) > 2 and argument.startswith("--"):
            _tokenize_long(table, argument, tokens)
        elif accept and len(argument) > 1 and argument.startswith("-"):
            _tokenize_cluster(table, argument, tokens)
        else:
            tokens.append(Argument(argument))
    return tokens


__all__ = (
    "tokenize",
)
