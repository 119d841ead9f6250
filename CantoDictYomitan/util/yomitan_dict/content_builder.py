"""Content building for Yomitan dictionary structured content."""

import threading
from typing import Any, Callable, List, Optional

from CantoDictYomitan.util.config.configuration import SENTENCE, COMPOUND, Source
from CantoDictYomitan.util.logging_config import logger
from .contracts import Entry, KanjiBankNotSupportedError
from .entry_index import EntryIndex
from .structured_content import EmptyNode, Node, element, structured_content

DanglingReferenceHook = Callable[[Entry, str, Any], None]


class ContentBuilder:
    """
    Builds Yomitan structured content and term entries for CantoDict entries.

    This class manages:
    - The headword block with brackets, variants and readings
    - Definition and note lists
    - Compound links and example sentences resolved through the entry index
    - Term bank rows for the headword and each of its variants
    """

    SEPARATOR = "・"
    OPEN_BRACKET = "【"
    CLOSE_BRACKET = "】"
    NOTE_MARKER = '"📝 "'

    HEADWORD_STYLE = {"fontSize": "150%"}

    def __init__(self, source: Optional[Source] = None,
                 on_dangling_reference: Optional[DanglingReferenceHook] = None):
        """
        Initialize the content builder.

        Args:
            source: Source settings (reading schemes, languages, term kinds)
            on_dangling_reference: Called with (entry, kind, id) for every
                cross-reference that is not in the index
        """
        self.source = source or Source()
        self.on_dangling_reference = on_dangling_reference
        self.dangling_references = 0
        self._lock = threading.Lock()

    def _resolve(self, entry: Entry, kind: str, ref_ids: List[Any], index: EntryIndex) -> List[Entry]:
        resolved = []
        for ref_id in ref_ids:
            target = index.get_entry(kind, ref_id)
            if target is None:
                with self._lock:
                    self.dangling_references += 1
                logger.debug(f"{entry.key} references missing {kind} {ref_id}")
                if self.on_dangling_reference:
                    self.on_dangling_reference(entry, kind, ref_id)
                continue
            resolved.append(target)
        return resolved

    def build_readings_line(self, entry: Entry) -> str:
        """Join every configured reading scheme, e.g. "lai6 zi2・laih jí・lì zi"."""
        return self.SEPARATOR.join(entry.reading(scheme) for scheme in self.source.reading_schemes)

    def build_headword(self, entry: Entry) -> Node:
        if entry.variants:
            variants = element(
                "span",
                self.SEPARATOR + self.SEPARATOR.join(entry.variants),
                style=self.HEADWORD_STYLE,
                data={"cantodict": "variants"},
            )
        else:
            variants = EmptyNode()

        return element(
            "span",
            [
                element("span", self.OPEN_BRACKET, style=self.HEADWORD_STYLE),
                element("span", entry.surface_form, style=self.HEADWORD_STYLE, data={"cantodict": "chinese"}),
                variants,
                element("span", self.CLOSE_BRACKET, style=self.HEADWORD_STYLE),
                element("span", self.build_readings_line(entry), data={"cantodict": "readings"}),
            ],
            data={"cantodict": "headword"},
            lang=self.source.language,
        )

    def build_definitions(self, entry: Entry) -> Node:
        return element(
            "ul",
            [element("li", line) for line in entry.definition.split("\n")],
            data={"cantodict": "definition"},
            style={"listStyleType": "circle"},
            lang=self.source.language,
        )

    def build_notes(self, entry: Entry) -> Node:
        if not entry.notes:
            return EmptyNode()
        return element(
            "ul",
            [element("li", entry.notes)],
            data={"cantodict": "notes"},
            style={"listStyleType": self.NOTE_MARKER},
            lang=self.source.language,
        )

    def build_compounds(self, entry: Entry, index: EntryIndex) -> Optional[Node]:
        """
        Build the row of compound links, or None when the entry lists no compounds.

        Compounds missing from the index are skipped; if none resolve the
        section is still returned, with no children.
        """
        if not entry.compound_refs:
            return None

        links = []
        for compound in self._resolve(entry, COMPOUND, entry.compound_refs, index):
            links.append(element(
                "a",
                compound.surface_form,
                href=f"?query={compound.surface_form}&wildcards=off",
            ))
            links.append(element("span", self.SEPARATOR))
        # Drop the trailing separator
        links = links[:-1]

        return element(
            "div",
            links,
            data={"cantodict": "compounds"},
            lang=self.source.language,
        )

    def build_sentences(self, entry: Entry, index: EntryIndex) -> Optional[Node]:
        """Build the example sentence list, or None when the entry lists no sentences."""
        if not entry.sentence_refs:
            return None

        items = []
        for sentence in self._resolve(entry, SENTENCE, entry.sentence_refs, index):
            items.append(element("li", sentence.surface_form))
            items.append(element(
                "li",
                sentence.definition,
                lang=self.source.translation_language,
                style={"fontSize": "80%", "listStyleType": "none"},
            ))

        return element(
            "ul",
            items,
            data={"cantodict": "sentences"},
            style={"listStyleType": "square"},
            lang=self.source.language,
        )

    def build_sections(self, entry: Entry, index: EntryIndex) -> List[Node]:
        """
        Build the card sections in display order.

        Headword, definitions and notes are always present (notes as an
        EmptyNode when there is none). Compounds and sentences only appear when
        the entry lists references of that kind.
        """
        sections = [
            self.build_headword(entry),
            self.build_definitions(entry),
            self.build_notes(entry),
        ]
        compounds = self.build_compounds(entry, index)
        if compounds is not None:
            sections.append(compounds)
        sentences = self.build_sentences(entry, index)
        if sentences is not None:
            sections.append(sentences)
        return sections

    def build_structured_content(self, entry: Entry, index: EntryIndex) -> dict:
        """
        Build the Yomitan structured content object for an entry.

        Returns:
            {"type": "structured-content", "content": [...]}
        """
        return structured_content(self.build_sections(entry, index))

    def create_term_entries(self, entry: Entry, index: EntryIndex) -> List[list]:
        """
        Create the term bank rows for a compound or character.

        The first row is the headword itself; each variant spelling gets a copy
        of it with only the term replaced. All rows share one structured
        content object.

        Args:
            entry: A compound or character entry
            index: Index used to resolve compounds and sentences

        Returns:
            List of Yomitan term entries, headword first
        """
        if entry.kind not in self.source.term_kinds:
            raise ValueError(f"Cannot build term entries for {entry.key}: kind '{entry.kind}' is not a term kind")

        term_entry = [
            entry.surface_form,                                 # term
            entry.reading(self.source.reading_type),            # reading
            " ".join(entry.pos),                                # definitionTags
            "",                                                 # rules
            entry.frequency or 0,                               # score
            [self.build_structured_content(entry, index)],      # definitions
            0,                                                  # sequence
            entry.dialect or "",                                # termTags
        ]

        entries = [term_entry]
        for variant in entry.variants:
            variant_entry = list(term_entry)
            variant_entry[0] = variant
            entries.append(variant_entry)
        return entries

    def create_kanji_bank_entry(self, entry: Entry, index: EntryIndex) -> list:
        """Kanji bank rows need radical and stroke data that the export does not carry yet."""
        raise KanjiBankNotSupportedError(f"Kanji bank entries are not supported yet ({entry.key})")


def synthesize(entry: Entry, index: EntryIndex, source: Optional[Source] = None) -> List[list]:
    """Term bank rows for one entry, using a throwaway ContentBuilder."""
    return ContentBuilder(source).create_term_entries(entry, index)
