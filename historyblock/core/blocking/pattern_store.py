"""Gestionnaire des patterns de la blacklist/whitelist.

Seul proprietaire de l'etat persiste (patterns + mode de liste):
- Ajout, suppression, import, vidage, changement de mode
- Dedoublonnage exact (sensible a la casse), ordre d'insertion conserve
- Persistance complete puis relecture de confirmation a chaque mutation
- Notification 'blacklistUpdated' apres chaque mutation reussie

Thread safety: une seule Lock couvre lecture, verification, mutation et
persistance, deux add() concurrents du meme pattern n'ecrivent qu'une fois.

L'etat resident est compare a la signature du stockage avant chaque
snapshot(): une ecriture d'un autre processus (CLI, autre worker) est vue
a la visite suivante et publie 'blacklistUpdated'.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any

from historyblock.core.blocking.notifier import ChangeNotifier
from historyblock.core.storage.sync_storage import SyncStorage
from historyblock.models.blacklist import (
    ACTION_BLACKLIST_UPDATED,
    BlacklistState,
    DEFAULT_LIST_MODE,
    ListMode,
    STORAGE_KEY_BLACKLIST,
    STORAGE_KEY_LIST_MODE,
)

logger = logging.getLogger(__name__)

IMPORT_SEPARATOR = ","


class PatternStore:
    """Gestionnaire CRUD des patterns avec persistance synchronisee."""

    def __init__(
        self,
        storage: SyncStorage,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._storage = storage
        self._notifier = notifier
        self._state: BlacklistState | None = None
        self._signature: Any = None
        self._lock = Lock()

    @property
    def storage(self) -> SyncStorage:
        return self._storage

    def load(self) -> BlacklistState:
        """Retourne l'etat persiste, initialise a vide s'il n'existe pas.

        Returns:
            BlacklistState relu depuis le stockage
        """
        with self._lock:
            return self._load_locked()

    def snapshot(self) -> BlacklistState:
        """Retourne le dernier etat confirme.

        Relit le stockage au premier acces ou si un autre ecrivain l'a
        modifie depuis la derniere lecture. Dans ce dernier cas
        'blacklistUpdated' est publie.
        """
        with self._lock:
            if self._state is None:
                return self._load_locked()
            if self._storage.signature() == self._signature:
                return self._state
            state = self._load_locked()

        logger.info("Stockage modifie par un autre ecrivain, etat recharge")
        self._notify()
        return state

    def invalidate(self) -> None:
        """Oublie l'etat resident, le prochain acces relit le stockage."""
        with self._lock:
            self._state = None

    def add(self, pattern: Any) -> bool:
        """Ajoute un pattern en fin de liste.

        Args:
            pattern: Pattern (expression reguliere) a ajouter

        Returns:
            True si ajoute, False si vide ou deja present
        """
        value = _clean(pattern)
        if not value:
            logger.debug("Pattern vide ignore")
            return False

        with self._lock:
            state = self._load_locked()
            if state.contains(value):
                logger.debug(f"Pattern deja present (pattern={value})")
                return False
            self._persist_locked(state.with_patterns(state.patterns + (value,)))

        logger.info(f"Blacklist: ajout '{value}'")
        self._notify()
        return True

    def remove(self, pattern: Any) -> bool:
        """Supprime un pattern (correspondance exacte).

        Returns:
            True si supprime, False si absent
        """
        value = _clean(pattern)
        if not value:
            return False

        with self._lock:
            state = self._load_locked()
            if not state.contains(value):
                logger.debug(f"Pattern absent (pattern={value})")
                return False
            patterns = list(state.patterns)
            patterns.remove(value)
            self._persist_locked(state.with_patterns(patterns))

        logger.info(f"Blacklist: suppression '{value}'")
        self._notify()
        return True

    def import_many(self, raw_list: Any) -> int:
        """Importe une liste de patterns separes par des virgules.

        Une seule persistance pour tout le lot.

        Args:
            raw_list: Chaine 'a,b, c'

        Returns:
            Nombre de patterns effectivement ajoutes
        """
        if not isinstance(raw_list, str) or not raw_list:
            return 0

        with self._lock:
            state = self._load_locked()
            patterns = list(state.patterns)
            for token in raw_list.split(IMPORT_SEPARATOR):
                token = token.strip()
                if token and token not in patterns:
                    patterns.append(token)

            added = len(patterns) - len(state.patterns)
            if added == 0:
                logger.debug("Import sans nouveau pattern")
                return 0
            self._persist_locked(state.with_patterns(patterns))

        logger.info(f"Blacklist: import (added={added})")
        self._notify()
        return added

    def clear(self) -> None:
        """Vide la liste des patterns, le mode est conserve.

        La cle 'blacklist' est retiree du stockage puis reinitialisee a vide.
        """
        with self._lock:
            self._storage.remove(STORAGE_KEY_BLACKLIST)
            state = self._load_locked()

        logger.info(f"Blacklist videe (mode={state.mode.value})")
        self._notify()

    def set_mode(self, mode: Any) -> bool:
        """Change le mode de liste.

        Args:
            mode: ListMode ou 'blacklist' / 'whitelist'

        Returns:
            True si le mode a ete persiste, False si la valeur est invalide
        """
        parsed = ListMode.parse(mode)
        if parsed is None:
            logger.warning(f"Mode de liste invalide ignore (mode={mode!r})")
            return False

        with self._lock:
            state = self._load_locked()
            self._persist_locked(state.with_mode(parsed))

        logger.info(f"Mode de liste: {parsed.value}")
        self._notify()
        return True

    def export(self) -> str:
        """Retourne les patterns joints par des virgules (format d'import)."""
        return IMPORT_SEPARATOR.join(self.load().patterns)

    def _load_locked(self) -> BlacklistState:
        # Signature prise avant la lecture: une ecriture concurrente
        # provoque au pire une relecture de trop
        signature = self._storage.signature()
        data = self._storage.get()
        if STORAGE_KEY_BLACKLIST not in data:
            initial: dict[str, Any] = {STORAGE_KEY_BLACKLIST: []}
            if STORAGE_KEY_LIST_MODE not in data:
                initial[STORAGE_KEY_LIST_MODE] = DEFAULT_LIST_MODE.value
            self._storage.set(initial)
            signature = self._storage.signature()
            data = self._storage.get()
            logger.info("Etat de la blacklist initialise")
        self._state = BlacklistState.from_dict(data)
        self._signature = signature
        return self._state

    def _persist_locked(self, state: BlacklistState) -> None:
        self._storage.set(state.to_dict())
        self._signature = self._storage.signature()
        self._state = BlacklistState.from_dict(self._storage.get())

    def _notify(self) -> None:
        if self._notifier is not None:
            self._notifier.publish(ACTION_BLACKLIST_UPDATED)


def _clean(pattern: Any) -> str:
    if not isinstance(pattern, str):
        return ""
    return pattern.strip()
