"""
JMdict loader.

Parses JMdict XML into LexiconEntry objects. Part-of-speech values are
stored as JMdict writes them once its DTD entities are expanded, e.g.
`&v1;` becomes "Ichidan verb" and `&prt;` becomes "particle".
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from lxml import etree

from wakachi import settings
from wakachi.raw_types import LexiconEntry, Sense

logger = logging.getLogger(__name__)

ENTITY_PATTERN = re.compile(rb'<!ENTITY\s+([\w-]+)\s+"([^"]*)"\s*>')

# Predefined XML entities, never declared by JMdict itself
XML_ENTITIES = frozenset(['lt', 'gt', 'amp', 'apos', 'quot'])


@dataclass
class JMdict:
    """Parsed JMdict contents."""
    entries: Tuple[LexiconEntry, ...] = ()
    entities: Dict[str, str] = field(default_factory=dict)


# ============================================================================
# Entity Parsing
# ============================================================================

def parse_entity_definitions(xml_path: Path) -> Dict[str, str]:
    """
    Parse entity definitions from the JMdict internal DTD.

    Returns:
        Entity name -> expansion (e.g. "v5n" -> "Godan verb with 'nu' ending")
    """
    entities: Dict[str, str] = {}

    with open(xml_path, 'rb') as f:
        content = b''
        for line in f:
            content += line
            if b']>' in line:
                break

    for match in ENTITY_PATTERN.finditer(content):
        name = match.group(1).decode('utf-8')
        value = match.group(2).decode('utf-8')
        if name not in XML_ENTITIES:
            entities[name] = value

    return entities


# ============================================================================
# JMdict Parsing
# ============================================================================

def node_text(elem) -> str:
    """Get all text from element."""
    return ''.join(elem.itertext())


def parse_entry(elem) -> LexiconEntry:
    """
    Build a LexiconEntry from an <entry> element.

    Raises:
        ValueError: If the entry has no reading or no sense
    """
    kanji = tuple(node_text(keb) for keb in elem.iterfind('k_ele/keb'))
    readings = tuple(node_text(reb) for reb in elem.iterfind('r_ele/reb'))

    senses = []
    for sense in elem.iterfind('sense'):
        senses.append(Sense(
            glossary=tuple(node_text(gloss) for gloss in sense.iterfind('gloss')),
            pos=tuple(node_text(pos) for pos in sense.iterfind('pos')),
        ))

    return LexiconEntry(kanji=kanji, readings=readings, senses=tuple(senses))


def read_jmdict(xml_path: Path) -> JMdict:
    """
    Read and parse a JMdict file.

    Args:
        xml_path: Path to JMdict XML (e.g. JMdict_e)

    Returns:
        JMdict with entries in file order and the declared entities

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    xml_path = Path(xml_path)
    if not xml_path.exists():
        raise FileNotFoundError(
            f"JMdict not found at {xml_path}. "
            f"Download it from {settings.JMDICT_URL} "
            "and point WAKACHI_JMDICT_PATH at the unpacked file."
        )

    logger.info("Parsing entity definitions...")
    entities = parse_entity_definitions(xml_path)

    logger.info(f"Parsing JMdict entries from {xml_path}...")
    context = etree.iterparse(
        str(xml_path),
        events=('end',),
        tag='entry',
        load_dtd=True,
        resolve_entities=True,
        no_network=True,
    )

    entries: List[LexiconEntry] = []
    skipped = 0
    for count, (event, elem) in enumerate(context, start=1):
        try:
            entries.append(parse_entry(elem))
        except ValueError as e:
            skipped += 1
            logger.debug(f"Skipping entry: {e}")

        if count % 10000 == 0:
            logger.info(f"  Parsed {count} entries...")

        elem.clear()
        while elem.getprevious() is not None:
            del elem.getparent()[0]

    logger.info(f"Parsed {len(entries)} entries ({skipped} skipped)")
    return JMdict(entries=tuple(entries), entities=entities)
