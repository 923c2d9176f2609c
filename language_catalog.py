# language_catalog.py
# The LanguageCatalog owns the list of selectable languages, the active language
# and the source text being edited. It is populated from the execution service
# at startup and falls back to the built-in table in config.py when the service
# cannot be reached, so that language selection and editing keep working offline.

import logging

from PySide6.QtCore import QObject, Signal, Slot

import config
from exceptions import MalformedResponseError, UnknownLanguageError
from models import LanguageDescriptor

logger = logging.getLogger(__name__)


def fallback_languages():
    """Descriptors for the built-in language table, in declaration order."""
    return tuple(
        LanguageDescriptor(
            id=language_id,
            display_name=language_id.capitalize(),
            file_extension=extension,
            sample_source=sample,
        )
        for language_id, (extension, sample) in config.FALLBACK_LANGUAGES.items()
    )


def default_language(languages):
    """The language with the default id, else the first one, else None."""
    for language in languages:
        if language.id == config.DEFAULT_LANGUAGE_ID:
            return language
    return languages[0] if languages else None


class LanguageCatalog(QObject):
    """
    Holds the ordered language catalog plus the selected-language/source-text pair.
    All mutation goes through select_language, set_source_text and reset_source_text.
    """
    catalog_loaded = Signal(object)          # tuple of LanguageDescriptor
    active_language_changed = Signal(object)  # LanguageDescriptor or None
    source_text_changed = Signal(str)
    advisory_raised = Signal(str)            # offline-mode notice
    advisory_dismissed = Signal()

    def __init__(self, network_manager, parent=None):
        super().__init__(parent)
        self.network_manager = network_manager
        self._languages = ()
        self._by_id = {}
        self._active_language = None
        self._source_text = ""
        self._advisory = None
        self._offline = False
        self._is_loaded = False
        self._pending_call = None

    @property
    def languages(self):
        return self._languages

    @property
    def active_language(self):
        return self._active_language

    @property
    def source_text(self):
        return self._source_text

    @property
    def advisory(self):
        return self._advisory

    @property
    def offline(self):
        return self._offline

    @property
    def is_loaded(self):
        return self._is_loaded

    def get(self, language_id):
        return self._by_id.get(language_id)

    def load(self):
        """Requests the catalog from the server; completes through catalog_loaded."""
        if self._pending_call is not None:
            logger.debug("LanguageCatalog: load already in progress, ignoring.")
            return
        call = self.network_manager.fetch_languages()
        self._pending_call = call
        call.succeeded.connect(self._on_languages_received)
        call.failed.connect(self._on_languages_failed)

    @Slot(object)
    def _on_languages_received(self, payload):
        self._pending_call = None
        try:
            languages = self._decode_languages(payload)
        except MalformedResponseError as e:
            logger.error("LanguageCatalog: invalid catalog payload: %s", e)
            self._apply_fallback()
            return
        logger.info("LanguageCatalog: loaded %d languages from server.", len(languages))
        self._offline = False
        self._apply_languages(languages)
        self.dismiss_advisory()

    @Slot(object)
    def _on_languages_failed(self, error):
        self._pending_call = None
        logger.error("LanguageCatalog: failed to fetch languages: %s", error)
        self._apply_fallback()

    def _decode_languages(self, payload):
        if not isinstance(payload, list):
            raise MalformedResponseError(f"Language catalog is not a list: {type(payload).__name__}")
        languages = []
        seen = set()
        for entry in payload:
            language = LanguageDescriptor.from_payload(entry)
            if language.id in seen:
                logger.warning("LanguageCatalog: duplicate language id %r ignored.", language.id)
                continue
            seen.add(language.id)
            if not language.sample_source and language.id in config.FALLBACK_LANGUAGES:
                _, sample = config.FALLBACK_LANGUAGES[language.id]
                language = LanguageDescriptor(language.id, language.display_name, language.file_extension, sample)
            languages.append(language)
        return tuple(languages)

    def _apply_fallback(self):
        self._offline = True
        self._apply_languages(fallback_languages())
        self._advisory = config.OFFLINE_ADVISORY
        self.advisory_raised.emit(self._advisory)

    def _apply_languages(self, languages):
        self._languages = languages
        self._by_id = {language.id: language for language in languages}
        self._is_loaded = True
        self.catalog_loaded.emit(self._languages)
        self._set_active_language(default_language(languages))

    def _set_active_language(self, language):
        self._active_language = language
        self.active_language_changed.emit(language)
        self._replace_source_text(language.sample_source if language else "")

    def select_language(self, language_id):
        """
        Makes language_id active and resets the edited text to its sample.

        Raises:
            UnknownLanguageError: If language_id is not in the catalog.
        """
        language = self._by_id.get(language_id)
        if language is None:
            raise UnknownLanguageError(language_id)
        logger.debug("LanguageCatalog: language selected: %s", language_id)
        self._set_active_language(language)

    def set_source_text(self, text):
        self._replace_source_text(text if text is not None else "")

    def reset_source_text(self):
        language = self._active_language
        self._replace_source_text(language.sample_source if language else "")

    def _replace_source_text(self, text):
        if text == self._source_text:
            return
        self._source_text = text
        self.source_text_changed.emit(text)

    def dismiss_advisory(self):
        if self._advisory is None:
            return
        self._advisory = None
        self.advisory_dismissed.emit()
