"""
tagflags argument scanner: consume argv and write option values into a record.

What this module provides
- Scanner: the state machine that walks an argument vector against a descriptor
  table, mutating the bound record and collecting positional arguments.
- parse(argv, record): build the table for the record and scan argv once.
- invoke(record, argv): CLI glue around parse() that renders faults with rich
  and exits, for use straight from a program's entry point.

Scanning rules (argv[0] is the program name and is never scanned)
- "--" ends option processing; every later token is positional.
- "" is positional.
- "-x=VALUE" / "--xyz=VALUE": inline value for a value-taking option.
- "-abc": cluster of short options; only the last one may take a value, and
  that value is the next token.
- "-x" / "--xyz": single option; value-taking ones consume the next token.
- anything else is positional. Options and positionals interleave freely.

Repetition
- no-value options may repeat: booleans stay True, integers count.
- value-taking options receive at most one value across all their spellings.

Faults
- every user error is raised as a ParseError subclass carrying the positional
  arguments collected so far (fault.positionals) and the argv position.
- record declaration mistakes surface as DefinitionError before scanning.
"""
import difflib
import enum
import os.path
import shlex
import sys
from collections.abc import Iterable

from .coercion import assign, bump
from .faults import *
from .table import define
from .utils import *


class State(enum.Enum):
    NORMAL = "normal"
    AWAITING_VALUE = "awaiting-value"
    LITERAL_ONLY = "literal-only"


_EXPECTATIONS = {
    "boolean": "expected one of 1, t, true, 0, f, false",
    "signed-integer": "expected a whole number, for example 42 or -7",
    "unsigned-integer": "expected a whole number without sign, for example 42",
}


class Scanner:
    """
    One-shot argument scanner bound to a table and a record.

    Options
    - prog: program name shown in fault headers and hints.
    - shell: when True, faults are printed (rich) and the process exits instead
      of raising; warnings are printed instead of going through warnings.warn.
    - fancy / colorful / console: rendering controls forwarded to faults.
    """

    def __init__(self, table, record, /, **options):
        self._table = table
        self._record = record
        self._options = options
        self._reset()

    def _reset(self):
        self._positionals = []
        self._assigned = set()
        self._state = State.NORMAL
        self._pending = None
        self._index = 0

    @property
    def state(self):
        return self._state

    @property
    def positionals(self):
        return list(self._positionals)

    @property
    def prog(self):
        return self._options.get("prog") or "program"

    def trigger(self, fault, /, **options):
        """
        Surface a fault with the scan context (position, positionals) attached.
        """
        return trigger(
            fault,
            index=self._index,
            positionals=tuple(self._positionals),
            **self._options | options,
        )

    def _hint(self, spelling):
        suggestions = difflib.get_close_matches(spelling, self._table.spellings.keys(), 5)
        if suggestions:
            return "did you mean %r?" % suggestions[0], suggestions
        if "--help" in self._table:
            return "run '%s --help' to see all available options" % self.prog, suggestions
        return "check the spelling of the option", suggestions

    def _lookup(self, spelling, token):
        try:
            return self._table[spelling]
        except KeyError:
            pass

        hint, suggestions = self._hint(spelling)
        if spelling == token:
            message = "unknown option %r at %s position" % (spelling, ordinal(self._index))
        else:
            message = "unknown option %r (part of %r) at %s position" % (spelling, token, ordinal(self._index))
        return self.trigger(UnknownOptionError(
            message,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            token=token,
            input=spelling,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        ))

    def _store(self, descriptor, value, token, /, *, spelling):
        """
        Assign a value to a value-taking option, at most once per option.
        """
        if descriptor.combined in self._assigned:
            return self.trigger(DuplicateOptionError(
                "option %s was passed multiple times (again at %s position)" % (descriptor.combined, ordinal(self._index)),
                title="duplicate option",
                code=FaultCode.DUPLICATE_OPTION,
                token=token,
                input=spelling,
                hint="pass %s only once" % descriptor.combined,
                docs=getdoc(FaultCode.DUPLICATE_OPTION),
            ))
        try:
            assign(self._record, descriptor, value)
        except ValueError:
            return self.trigger(InvalidValueError(
                "option %s: invalid value %r at %s position" % (spelling, value, ordinal(self._index)),
                title="invalid value",
                code=FaultCode.INVALID_VALUE,
                token=token,
                input=spelling,
                value=value,
                hint=_EXPECTATIONS.get(descriptor.kind.value, "expected a valid %s" % descriptor.kind.value),
                docs=getdoc(FaultCode.INVALID_VALUE),
            ))
        self._assigned.add(descriptor.combined)

    def _await(self, descriptor):
        self._pending = descriptor
        self._state = State.AWAITING_VALUE

    def _inline(self, token):
        spelling, value = token.split("=", 1)
        descriptor = self._lookup(spelling, token)
        if not descriptor.takes_value:
            return self.trigger(OptionTakesNoValueError(
                "option %s at %s position does not take an argument" % (spelling, ordinal(self._index)),
                title="option takes no value",
                code=FaultCode.OPTION_TAKES_NO_VALUE,
                token=token,
                input=spelling,
                hint="remove everything from '=' (for example: %s)" % spelling,
                docs=getdoc(FaultCode.OPTION_TAKES_NO_VALUE),
            ))
        if not value:
            self.trigger(EmptyInlineValueWarning(
                "empty inline value for option %s at %s position" % (spelling, ordinal(self._index)),
                title="empty inline value",
                code=FaultCode.EMPTY_INLINE_VALUE,
                token=token,
                input=spelling,
                hint="add a value after '=' (for example: %s=%s)" % (spelling, descriptor.metavar),
                docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
            ))
        self._store(descriptor, value, token, spelling=spelling)

    def _cluster(self, token):
        letters = token[1:]
        for position, letter in enumerate(letters, start=1):
            descriptor = self._lookup(spelling := "-" + letter, token)
            if not descriptor.takes_value:
                bump(self._record, descriptor)
                continue
            # a value-taking option may only close the cluster
            if position == len(letters):
                return self._await(descriptor)
            return self.trigger(MissingValueInClusterError(
                "option %s requires an argument (part of %r at %s position)" % (spelling, token, ordinal(self._index)),
                title="missing value in cluster",
                code=FaultCode.MISSING_VALUE_IN_CLUSTER,
                token=token,
                input=spelling,
                hint="put %s last in the cluster or pass it on its own (for example: %s %s)" % (
                    spelling, spelling, descriptor.metavar
                ),
                docs=getdoc(FaultCode.MISSING_VALUE_IN_CLUSTER),
            ))

    def _single(self, token):
        descriptor = self._lookup(token, token)
        if descriptor.takes_value:
            return self._await(descriptor)
        bump(self._record, descriptor)

    def scan(self, argv, /):
        """
        Scan argv (argv[0] skipped) and return the positional arguments.

        Raises
        - ParseError subclasses on user errors (non-shell mode).
        """
        self._reset()

        for self._index, token in enumerate(argv[1:], start=1):
            if self._state is State.AWAITING_VALUE:
                descriptor, self._pending = self._pending, None
                self._state = State.NORMAL
                self._store(descriptor, token, token, spelling=descriptor.spelling)
                continue

            if self._state is State.LITERAL_ONLY:
                self._positionals.append(token)
            elif token == "--":
                self._state = State.LITERAL_ONLY
            elif not token.startswith("-"):
                # also covers "", which is a positional argument like any other
                self._positionals.append(token)
            elif "=" in token:
                self._inline(token)
            elif len(token) > 2 and token[1] != "-":
                self._cluster(token)
            else:
                self._single(token)

        if self._state is State.AWAITING_VALUE:
            descriptor = self._pending
            return self.trigger(TruncatedOptionError(
                "option %s requires an argument %s" % (descriptor.spelling, descriptor.metavar),
                title="missing value",
                code=FaultCode.TRUNCATED_OPTION,
                input=descriptor.spelling,
                hint="pass a value after %s (for example: %s %s)" % (
                    descriptor.spelling, descriptor.spelling, descriptor.metavar
                ),
                docs=getdoc(FaultCode.TRUNCATED_OPTION),
            ))

        return list(self._positionals)


def parse(argv, record, /, **options):
    """
    Parse argv into record and return the positional arguments.

    Parameters
    - argv: sequence of str, like sys.argv (argv[0] is skipped).
    - record: the bound record; its tagged fields are written in place.
    - **options: Scanner options (prog, shell, fancy, colorful, console).

    Raises
    - DefinitionError: the record's declaration is malformed.
    - ParseError: a user input error; fault.positionals holds the positional
      arguments collected before it.
    """
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("parse() first argument must be a sequence of strings")
    argv = list(argv)
    if not all(isinstance(token, str) for token in argv):
        raise TypeError("parse() first argument must be a sequence of strings")

    table = define(record)
    if argv and "prog" not in options:
        options["prog"] = os.path.basename(argv[0])
    return Scanner(table, record, **options).scan(argv)


def invoke(record, argv=Unset, /, *, prog=Unset, shell=True, fancy=False, colorful=True, **options):
    """
    Run the parser for a program entry point.

    Parameters
    - argv:
      • Unset: use sys.argv.
      • str: shell-like string split with shlex; the program name is prepended.
      • Iterable[str]: a complete argv (argv[0] is the program name).
    - prog: program name for messages (defaults to basename of argv[0]).
    - shell: print faults with rich and exit with status 2 instead of raising.

    Returns
    - list of positional arguments.
    """
    if argv is Unset:
        argv = list(sys.argv)
    elif isinstance(argv, str):
        argv = [coalesce(prog, os.path.basename(sys.argv[0]) if sys.argv else "program"), *shlex.split(argv)]
    elif isinstance(argv, Iterable):
        argv = list(argv)
    else:
        raise TypeError("invoke() second argument must be a string or an iterable of strings")

    prog = coalesce(prog, os.path.basename(argv[0]) if argv else "program")
    return parse(argv, record, prog=prog, shell=shell, fancy=fancy, colorful=colorful, **options)


__all__ = (
    "State",
    "Scanner",
    "parse",
    "invoke",
)
