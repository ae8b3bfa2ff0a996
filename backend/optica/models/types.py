from sqlalchemy import Enum as SAEnum


class LowercaseEnum(SAEnum):
    """Enum column persisted by value, lenient about the spelling it receives.

    ``"Al Aire"``, ``"AL-AIRE"`` and ``FrameType.AL_AIRE`` all bind as
    ``"al_aire"``; rows read back with stray casing still resolve to members.
    """

    def __init__(self, enum_cls, **kwargs):
        self._enum_cls = enum_cls
        self._enum_kwargs = kwargs.copy()
        kwargs.setdefault("values_callable", lambda enum: [e.value for e in enum])
        kwargs.setdefault("native_enum", False)
        kwargs.setdefault("validate_strings", True)
        super().__init__(enum_cls, **kwargs)

    @staticmethod
    def _canonical(value: str) -> str:
        return value.strip().lower().replace("-", "_").replace(" ", "_")

    def adapt(self, impltype, **kw):
        params = {**self._enum_kwargs, **kw}
        return LowercaseEnum(self._enum_cls, **params)

    def bind_processor(self, dialect):
        parent = super().bind_processor(dialect)

        def process(value):
            if value is None:
                return None
            if isinstance(value, self._enum_cls):
                value = value.value
            elif isinstance(value, str):
                value = self._canonical(value)
            if parent:
                return parent(value)
            return value

        return process

    def result_processor(self, dialect, coltype):
        parent = super().result_processor(dialect, coltype)

        def process(value):
            if value is None:
                return None
            if isinstance(value, str):
                value = self._canonical(value)
            if parent:
                return parent(value)
            return value

        return process
