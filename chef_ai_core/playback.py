"""
Canal de reproducción exclusivo.

En una misma superficie de UI solo puede haber un objeto produciendo audio a
la vez (una locución del sintetizador o un buffer PCM del asistente). El
canal modela eso como un handle con dueño explícito: `acquire` detiene al
dueño anterior antes de entregar el canal, y `release` solo lo libera si
quien lo pide sigue siendo el dueño actual.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Playback(Protocol):
    def stop(self) -> None:
        ...


class PlaybackChannel:
    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._current: Optional[Playback] = None

    @property
    def current(self) -> Optional[Playback]:
        return self._current

    @property
    def busy(self) -> bool:
        return self._current is not None

    def acquire(self, holder: Playback) -> Playback:
        """
        Entrega el canal a `holder`, deteniendo antes al dueño anterior.

        El dueño anterior se desvincula antes de llamar a su `stop()`, así los
        callbacks que dispare la detención (ej: error "interrupted") no pueden
        liberar el canal del nuevo dueño.
        """
        previous = self._current
        self._current = None
        if previous is not None and previous is not holder:
            logger.debug(f"Canal {self.name}: deteniendo reproducción previa")
            previous.stop()
        self._current = holder
        return holder

    def release(self, holder: Playback) -> bool:
        """Libera el canal si `holder` sigue siendo el dueño. Devuelve si lo liberó."""
        if self._current is holder:
            self._current = None
            return True
        return False

    def stop(self) -> None:
        holder = self._current
        self._current = None
        if holder is not None:
            holder.stop()
