from __future__ import annotations

import hashlib
import itertools

from menugrid.config import settings


class CallbackTokenFactory:
    """Детерминированные callback_data для кнопок-действий.

    Токены вида ``{namespace}:{n}`` стабильны между рендерами: фабрика,
    полученная через ``scoped()``, при каждой оценке динамического слота
    выдаёт ту же последовательность, поэтому нажатия на ранее отправленное
    сообщение продолжают находить свои кнопки.
    """

    def __init__(self, namespace: str):
        self.namespace = namespace
        self._counter = itertools.count()

    def next(self) -> str:
        return self._fit(f'{self.namespace}:{next(self._counter)}')

    def scoped(self, scope: str) -> CallbackTokenFactory:
        return CallbackTokenFactory(f'{self.namespace}:{scope}')

    @staticmethod
    def _fit(raw: str) -> str:
        if len(raw.encode()) <= settings.CALLBACK_DATA_MAX_LENGTH:
            return raw
        return hashlib.sha256(raw.encode()).hexdigest()[:16]


# Id меню не может содержать ':', поэтому токены отдельных кнопок с ним не пересекаются
default_token_factory = CallbackTokenFactory(':btn')
