"""Loading context that resolves class files within a single root."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from class_verifier.class_file_info import ClassFileInfo
from class_verifier.class_file_reader import (
    DEFAULT_MAX_MAJOR_VERSION,
    ClassFormatError,
    parse_class_file,
)
from class_verifier.errors import LoadInfrastructureError
from class_verifier.load_outcome import LoadOutcome, OutcomeStatus
from class_verifier.loading_context import LoadingContext, LoadingContextProvider

logger = logging.getLogger(__name__)

DEFAULT_PLATFORM_PREFIXES = ("com.sun.", "java.", "javax.", "jdk.", "sun.")

# The platform refuses to define classes from a root in this package
PROHIBITED_PACKAGE_PREFIX = "java."


class MissingClassError(LookupError):
    """A class needed during resolution has no file under the root."""

    def __init__(self, name: str) -> None:
        """Record the name of the missing class."""
        super().__init__(name)
        self.name = name


class WrongNameError(LookupError):
    """The file for a class name declares a different class."""

    def __init__(self, name: str, declared: str) -> None:
        """Record the requested and the declared class names."""
        super().__init__(f"{name} (wrong name: {declared})")
        self.name = name
        self.declared = declared


class ClassFileContext(LoadingContext):
    """Resolves dotted class names against ``.class`` files under one root.

    Classes are defined together with their supertypes, the way a class loader
    would, so a class whose superclass lives in another root is reported as an
    unresolved reference rather than as corrupt. The same holds for a class
    file that declares another name, which is what a root pointing into the
    middle of a package tree looks like.

    Platform prefixes only short-circuit supertype references. A candidate
    under a platform prefix is read from the root like any other, except that
    ``java.`` classes cannot be defined from a root at all.
    """

    def __init__(
        self,
        root: Path,
        extension: str = ".class",
        platform_prefixes: Iterable[str] = DEFAULT_PLATFORM_PREFIXES,
        max_major_version: int = DEFAULT_MAX_MAJOR_VERSION,
    ) -> None:
        """Initialize an empty context for root."""
        self.root = root
        self.extension = extension
        self.platform_prefixes = tuple(platform_prefixes)
        self.max_major_version = max_major_version
        self.defined: dict[str, ClassFileInfo] = {}
        self.corrupt: dict[str, ClassFormatError] = {}

    def resolve(self, name: str) -> LoadOutcome:
        """Define name and its supertypes, classifying the result.

        Raises LoadInfrastructureError when name itself cannot be looked up
        under the root, or names a prohibited platform package.
        """
        if name.startswith(PROHIBITED_PACKAGE_PREFIX):
            msg = f"Prohibited package name: {name} in {self.root}"
            raise LoadInfrastructureError(msg)

        try:
            self._define(name, ())
        except ClassFormatError as exc:
            return LoadOutcome(name, OutcomeStatus.CORRUPT, str(exc))
        except WrongNameError as exc:
            return LoadOutcome(name, OutcomeStatus.UNRESOLVED_REFERENCE, str(exc))
        except MissingClassError as exc:
            if exc.name == name:
                msg = f"Class {name} not found at {self.path_for(name)}"
                raise LoadInfrastructureError(msg) from exc
            return LoadOutcome(
                name, OutcomeStatus.UNRESOLVED_REFERENCE, f"missing {exc.name}"
            )
        return LoadOutcome(name, OutcomeStatus.LOADED)

    def is_platform_class(self, name: str) -> bool:
        """Return True if name is supplied by the platform rather than the root."""
        return name.startswith(self.platform_prefixes)

    def path_for(self, name: str) -> Path:
        """Return the file a class name maps to under the root."""
        return self.root / (name.replace(".", os.sep) + self.extension)

    def _define(self, name: str, chain: tuple[str, ...]) -> None:
        if name in self.defined or (chain and self.is_platform_class(name)):
            return
        if name in self.corrupt:
            raise self.corrupt[name]
        if name in chain:
            msg = f"circular superclass chain: {' -> '.join((*chain, name))}"
            raise ClassFormatError(msg)

        path = self.path_for(name)
        if not path.is_file():
            raise MissingClassError(name)

        try:
            data = path.read_bytes()
        except OSError as exc:
            msg = f"Cannot read {path}: {exc}"
            raise LoadInfrastructureError(msg) from exc

        try:
            info = parse_class_file(data, max_major_version=self.max_major_version)
        except ClassFormatError as exc:
            self.corrupt[name] = exc
            raise
        if info.this_class != name:
            raise WrongNameError(name, info.this_class)

        for supertype in info.supertypes:
            try:
                self._define(supertype, (*chain, name))
            except ClassFormatError as exc:
                if supertype in self.corrupt:
                    msg = f"supertype {supertype} of {name} is corrupt: {exc}"
                    raise ClassFormatError(msg) from exc
                raise

        logger.debug("Defined %s", name)
        self.defined[name] = info


class ClassFileContextProvider(LoadingContextProvider):
    """Creates a fresh ClassFileContext for every root."""

    def __init__(
        self,
        extension: str = ".class",
        platform_prefixes: Iterable[str] = DEFAULT_PLATFORM_PREFIXES,
        max_major_version: int = DEFAULT_MAX_MAJOR_VERSION,
    ) -> None:
        """Store the settings shared by every context."""
        self.extension = extension
        self.platform_prefixes = tuple(platform_prefixes)
        self.max_major_version = max_major_version

    def open_context(self, root: Path) -> ClassFileContext:
        """Return a new context rooted at root."""
        return ClassFileContext(
            root.absolute(),
            extension=self.extension,
            platform_prefixes=self.platform_prefixes,
            max_major_version=self.max_major_version,
        )
