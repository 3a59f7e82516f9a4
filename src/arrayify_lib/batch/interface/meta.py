# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from abc import ABCMeta

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import ArrayifyError
from arrayify_lib.core.logger import get_logger

from .interface import BatchInterface

logger = get_logger(__name__)


class BatchMeta(ABCMeta):
    """
    Metaclass for batch system classes.
    """

    # registry of supported batch systems
    _registry: dict[str, type[BatchInterface]] = {}

    def __str__(cls: type[BatchInterface]):
        """
        Get the string representation of the batch system class.
        """
        return cls.envName()

    @classmethod
    def register(mcs, batch_cls: type[BatchInterface]):
        """
        Register a batch system class in the metaclass registry.

        Args:
            batch_cls: Subclass of BatchInterface to register.
        """
        mcs._registry[batch_cls.envName()] = batch_cls

    @classmethod
    def fromStr(mcs, name: str) -> type[BatchInterface]:
        """
        Return the batch system class registered with the given name.

        Raises:
            ArrayifyError: If no class is registered for the given name.
        """
        try:
            return mcs._registry[name]
        except KeyError as e:
            raise ArrayifyError(f"No batch system registered as '{name}'.") from e

    @classmethod
    def guess(mcs) -> type[BatchInterface]:
        """
        Return the first registered batch system which reports itself as available.

        Raises:
            ArrayifyError: If no available batch system is found.
        """
        for BatchSystem in mcs._registry.values():
            if BatchSystem.isAvailable():
                logger.debug(f"Guessed batch system: {str(BatchSystem)}.")
                return BatchSystem

        raise ArrayifyError(
            "Could not guess a batch system. No registered batch system available."
        )

    @classmethod
    def fromEnvVarOrGuess(mcs) -> type[BatchInterface]:
        """
        Select a batch system based on the environment variable or by guessing.

        Raises:
            ArrayifyError: If the environment variable names an unknown batch system,
                    or if no available batch system can be guessed.
        """
        name = os.environ.get(CFG.env_vars.batch_system)
        if name:
            logger.debug(
                f"Using batch system name from an environment variable: {name}."
            )
            return mcs.fromStr(name)

        return mcs.guess()

    @classmethod
    def obtain(mcs, name: str | None) -> type[BatchInterface]:
        """
        Obtain a batch system class by name, environment variable, or guessing.

        Args:
            name (str | None): Optional name of the batch system to obtain.
                If `None`, falls back to `fromEnvVarOrGuess`.

        Raises:
            ArrayifyError: If no suitable batch system can be found.
        """
        if name:
            return mcs.fromStr(name)

        return mcs.fromEnvVarOrGuess()
