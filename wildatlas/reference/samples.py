# wildatlas/reference/samples.py
"""Datos de muestra para la fuente de scraping cuando Wikipedia no entrega filas."""
from __future__ import annotations

from typing import Tuple

from ..schemas import Species

# código → [(nombre, científico, estado, población, hábitat, amenazas)]
_SAMPLES = {
    "US": [
        ("California Condor", "Gymnogyps californianus", "Critically Endangered", "~500", "Mountains and forests", "Habitat loss, lead poisoning"),
        ("Florida Panther", "Puma concolor coryi", "Endangered", "~200", "Swamps and forests", "Habitat fragmentation, vehicle collisions"),
        ("Hawaiian Monk Seal", "Neomonachus schauinslandi", "Endangered", "~1,400", "Hawaiian Islands", "Climate change, marine debris"),
        ("Red Wolf", "Canis rufus", "Critically Endangered", "~20 in wild", "Forests and wetlands", "Hybridization, habitat loss"),
        ("Ocelot", "Leopardus pardalis", "Endangered", "~100 in US", "Dense thorny scrubland", "Habitat loss, vehicle strikes"),
    ],
    "BR": [
        ("Golden Lion Tamarin", "Leontopithecus rosalia", "Endangered", "~3,200", "Atlantic Forest", "Deforestation, illegal pet trade"),
        ("Hyacinth Macaw", "Anodorhynchus hyacinthinus", "Vulnerable", "~6,500", "Pantanal wetlands", "Illegal trade, habitat loss"),
        ("Jaguar", "Panthera onca", "Near Threatened", "~170,000", "Rainforests and wetlands", "Deforestation, poaching"),
        ("Amazon River Dolphin", "Inia geoffrensis", "Endangered", "Unknown", "Amazon River system", "Dam construction, pollution"),
        ("Black Lion Tamarin", "Leontopithecus chrysopygus", "Endangered", "~1,000", "Atlantic Forest", "Habitat fragmentation"),
    ],
    "CN": [
        ("Giant Panda", "Ailuropoda melanoleuca", "Vulnerable", "~1,800", "Mountain bamboo forests", "Habitat loss, low birth rate"),
        ("South China Tiger", "Panthera tigris amoyensis", "Critically Endangered", "~0 in wild", "Temperate forests", "Poaching, habitat loss"),
        ("Chinese Alligator", "Alligator sinensis", "Critically Endangered", "~150 in wild", "Yangtze River wetlands", "Habitat destruction, pollution"),
        ("Yangtze Finless Porpoise", "Neophocaena asiaeorientalis", "Critically Endangered", "~1,000", "Yangtze River", "Pollution, boat traffic"),
        ("Crested Ibis", "Nipponia nippon", "Endangered", "~2,600", "Wetlands and rice paddies", "Habitat loss, pesticides"),
    ],
    "IN": [
        ("Bengal Tiger", "Panthera tigris tigris", "Endangered", "~3,000", "Forests and grasslands", "Poaching, habitat loss"),
        ("Asian Elephant", "Elephas maximus", "Endangered", "~27,000 in India", "Forests and grasslands", "Habitat fragmentation, human conflict"),
        ("Indian Rhinoceros", "Rhinoceros unicornis", "Vulnerable", "~3,700", "Grasslands and riverine areas", "Poaching, habitat loss"),
        ("Ganges River Dolphin", "Platanista gangetica", "Endangered", "~3,500", "Ganges River system", "Pollution, dam construction"),
        ("Snow Leopard", "Panthera uncia", "Vulnerable", "~500 in India", "High mountain regions", "Poaching, climate change"),
    ],
    "AU": [
        ("Koala", "Phascolarctos cinereus", "Vulnerable", "~100,000", "Eucalyptus forests", "Habitat loss, disease, bushfires"),
        ("Numbat", "Myrmecobius fasciatus", "Endangered", "~1,000", "Eucalyptus woodlands", "Predation by foxes and cats"),
        ("Leadbeater's Possum", "Gymnobelideus leadbeateri", "Critically Endangered", "~1,500", "Mountain ash forests", "Logging, bushfires"),
        ("Northern Hairy-nosed Wombat", "Lasiorhinus krefftii", "Critically Endangered", "~300", "Semi-arid grasslands", "Competition with cattle, drought"),
        ("Tasmanian Devil", "Sarcophilus harrisii", "Endangered", "~25,000", "Tasmanian forests", "Devil facial tumour disease"),
    ],
    "KE": [
        ("Black Rhinoceros", "Diceros bicornis", "Critically Endangered", "~750 in Kenya", "Savannas and forests", "Poaching for horn"),
        ("African Wild Dog", "Lycaon pictus", "Endangered", "~600 in Kenya", "Savannas and grasslands", "Habitat fragmentation, human conflict"),
        ("Grevy's Zebra", "Equus grevyi", "Endangered", "~2,800", "Semi-arid grasslands", "Habitat loss, competition with livestock"),
        ("Hirola", "Beatragus hunteri", "Critically Endangered", "~500", "Semi-arid grasslands", "Drought, habitat loss, disease"),
        ("Mountain Bongo", "Tragelaphus eurycerus isaaci", "Critically Endangered", "~100 in wild", "Mountain forests", "Poaching, habitat loss"),
    ],
    "MG": [
        ("Aye-aye", "Daubentonia madagascariensis", "Endangered", "Unknown", "Rainforests", "Deforestation, persecution"),
        ("Indri", "Indri indri", "Critically Endangered", "~10,000", "Rainforests", "Habitat loss, hunting"),
        ("Silky Sifaka", "Propithecus candidus", "Critically Endangered", "~250", "Mountain rainforests", "Habitat loss, hunting"),
        ("Radiated Tortoise", "Astrochelys radiata", "Critically Endangered", "Unknown", "Spiny forests", "Illegal pet trade, habitat loss"),
        ("Ploughshare Tortoise", "Astrochelys yniphora", "Critically Endangered", "~500", "Bamboo scrub", "Illegal pet trade"),
    ],
    "ID": [
        ("Sumatran Tiger", "Panthera tigris sumatrae", "Critically Endangered", "~400", "Tropical rainforests", "Poaching, deforestation"),
        ("Sumatran Orangutan", "Pongo abelii", "Critically Endangered", "~14,000", "Tropical rainforests", "Habitat loss, illegal trade"),
        ("Javan Rhinoceros", "Rhinoceros sondaicus", "Critically Endangered", "~70", "Tropical rainforests", "Poaching, habitat loss"),
        ("Sumatran Rhinoceros", "Dicerorhinus sumatrensis", "Critically Endangered", "~80", "Tropical rainforests", "Poaching, habitat loss"),
        ("Komodo Dragon", "Varanus komodoensis", "Endangered", "~3,000", "Islands of Indonesia", "Habitat loss, climate change"),
    ],
}

_PLACEHOLDER = Species(
    name="Data unavailable",
    scientific_name="N/A",
    status="Please check IUCN Red List",
    population="Unknown",
    habitat="Various",
    threats="Multiple factors",
)


def sample_species(code: str) -> Tuple[Species, ...]:
    """Muestras del país, o un único registro de relleno si no hay."""
    rows = _SAMPLES.get((code or "").strip().upper())
    if not rows:
        return (_PLACEHOLDER,)
    return tuple(
        Species(name=n, scientific_name=s, status=st, population=p, habitat=h, threats=t)
        for n, s, st, p, h, t in rows
    )


SAMPLE_CODES = frozenset(_SAMPLES)

__all__ = ["sample_species", "SAMPLE_CODES"]
