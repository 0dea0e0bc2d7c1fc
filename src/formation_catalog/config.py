"""Configuration constants for formation-catalog."""

import os
from pathlib import Path

from formation_catalog.models.entry import Section

# Environment overrides for the content root and the data directory.
CONTENT_ROOT_ENV = "FORMATION_CATALOG_CONTENT"
DATA_DIR_ENV = "FORMATION_CATALOG_DATA"

# Content root candidates. First directory which is found is used. A URL set
# through CONTENT_ROOT_ENV always wins.
CONTENT_DIRECTORIES: list[Path] = [
    Path("src/assets/content"),
    Path("~/.local/share/formation-catalog/content").expanduser(),
]

# Directory for the offline cache database. First existing directory is used,
# otherwise the first entry is created on demand.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/formation-catalog").expanduser(),
    Path("~/.formation-catalog").expanduser(),
]

DEFAULT_SECTION = "Python"

SECTIONS: list[Section] = [
    Section(
        id="python",
        name="Python",
        description="Formation complète sur le langage Python, de la base à l'avancé",
        path="Python",
        icon="🐍",
        color="#3776ab",
    ),
    Section(
        id="angular",
        name="Angular",
        description="Construire des applications web avec Angular",
        path="Angular",
        color="#dd0031",
    ),
    Section(id="go", name="Go", description="Le langage Go et sa concurrence", path="Go"),
    Section(id="rust", name="Rust", description="Programmation système sûre avec Rust", path="Rust"),
    Section(id="java", name="Java", description="Java et la programmation objet", path="Java"),
    Section(
        id="obsidian",
        name="Obsidian",
        description="Prise de notes et gestion de connaissances avec Obsidian",
        path="Obsidian",
    ),
    Section(
        id="veille-technos",
        name="Veille technologique",
        description="Suivi des tendances et des outils",
        path="veille_technos",
    ),
]

# Sections whose identifier list comes from a generated files-index.json.
INDEXED_SECTIONS: frozenset[str] = frozenset({"Python"})
FILES_INDEX_NAME = "files-index.json"

# Static identifier lists. Also used as fallback for indexed sections.
SECTION_FILES: dict[str, tuple[str, ...]] = {
    "Python": (
        "01-introduction.md",
        "02-variables-et-types.md",
        "03-structures-de-controle.md",
        "04-fonctions.md",
        "05-ia-qdrant-introduction.md",
        "06-embeddings.md",
        "07-prompt-engineering.md",
        "08-classes-et-objets.md",
        "09-modules-et-packages.md",
        "10-gestion-des-erreurs.md",
        "11-fichiers-et-io.md",
        "12-exercices-bases.md",
        "20-ia-introduction.md",
        "21-01-openai-api.md",
        "21-02-anthropic-claude.md",
        "21-03-langchain.md",
        "21-04-llm-locaux.md",
        "21-llm-exploitation.md",
        "22-01-sentence-transformers.md",
        "22-02-openai-embeddings.md",
        "22-03-huggingface-embeddings.md",
        "22-embeddings.md",
        "23-01-installation-et-configuration.md",
        "23-02-collections-et-vecteurs.md",
        "23-03-recherche-par-similarite.md",
        "23-04-filtres-et-metadonnees.md",
        "23-qdrant.md",
        "24-01-techniques-avancees.md",
        "24-02-few-shot-learning.md",
        "24-03-chain-of-thought.md",
        "24-prompt-engineering.md",
        "25-01-architecture-rag.md",
        "25-02-implementation-rag.md",
        "25-rag.md",
        "26-exercices-ia.md",
        "30-01-api-rest-fastapi.md",
        "30-02-applications-web-flask.md",
        "30-03-applications-desktop.md",
        "30-applications-python.md",
        "31-01-kivy.md",
        "31-02-beeware.md",
        "31-03-react-native-python.md",
        "31-applications-mobiles.md",
        "32-01-pygame-introduction.md",
        "32-02-mecaniques-de-jeu.md",
        "32-03-gestion-des-sprites.md",
        "32-04-arcade-framework.md",
        "32-jeux-2d.md",
        "33-exercices-applications.md",
        "40-01-docker.md",
        "40-02-ci-cd.md",
        "40-03-deploiement-cloud.md",
        "40-04-monitoring-et-logs.md",
        "40-devops-python.md",
        "41-01-pytest.md",
        "41-02-tests-unitaires.md",
        "41-03-tests-d-integration.md",
        "41-tests.md",
        "42-01-profiling.md",
        "42-02-optimisation-memoire.md",
        "42-03-asyncio-et-concurrence.md",
        "42-performance.md",
        "43-exercices-devops.md",
        "50-01-chatbot-ia.md",
        "50-02-api-rag-complete.md",
        "50-03-jeu-2d-complet.md",
        "50-projets-pratiques.md",
        "51-exercices-avances.md",
    ),
}

DEFAULT_SORT_KEY = "999"
FALLBACK_CATEGORY = "Other"


def _top(n: int) -> int:
    """Folded sort number of a bare top-level key ``n``."""
    return n * 1_000_000


# Category range tables: (start, end, label), start inclusive, end exclusive,
# in folded sort-number units.
CATEGORY_RANGES: dict[str, list[tuple[int, int, str]]] = {
    "Python": [
        (_top(1), _top(20), "Bases Python"),
        (_top(20), _top(30), "Intelligence Artificielle"),
        (_top(30), _top(40), "Applications"),
        (_top(40), _top(50), "DevOps et Production"),
        (_top(50), _top(100), "Projets Pratiques"),
    ],
    "Angular": [
        (_top(1), _top(20), "Bases Angular"),
        (_top(20), _top(30), "Composants et Services"),
        (_top(30), _top(40), "Angular intermédiaire"),
        (_top(40), _top(50), "Angular avancé"),
        (_top(50), _top(100), "Projets Angular"),
    ],
    "Go": [
        (_top(1), _top(20), "Bases Go"),
        (_top(20), _top(30), "Concurrence"),
        (_top(30), _top(40), "Go intermédiaire"),
        (_top(40), _top(50), "Go avancé"),
        (_top(50), _top(100), "Projets Go"),
    ],
    "Rust": [
        (_top(1), _top(20), "Bases Rust"),
        (_top(20), _top(30), "Ownership et Emprunts"),
        (_top(30), _top(40), "Rust intermédiaire"),
        (_top(40), _top(50), "Rust avancé"),
        (_top(50), _top(100), "Projets Rust"),
    ],
    "Java": [
        (_top(1), _top(20), "Bases Java"),
        (_top(20), _top(30), "Programmation Objet"),
        (_top(30), _top(40), "Java intermédiaire"),
        (_top(40), _top(50), "Java avancé"),
        (_top(50), _top(100), "Projets Java"),
    ],
    "Obsidian": [
        (_top(1), _top(20), "Bases Obsidian"),
        (_top(20), _top(30), "Organisation des notes"),
        (_top(30), _top(40), "Plugins"),
        (_top(40), _top(100), "Usages avancés"),
    ],
    "veille_technos": [
        (_top(1), _top(20), "Tendances"),
        (_top(20), _top(30), "Intelligence Artificielle"),
        (_top(30), _top(40), "Outils"),
        (_top(40), _top(100), "Analyses"),
    ],
}

# Returned by document fetchers on any transport failure.
FETCH_FALLBACK_CONTENT = "# Erreur\n\nLe contenu demandé est introuvable."
FETCH_TIMEOUT_SECONDS: float = 10.0

# Offline cache.
CACHE_KEY = "formation_cache"
CACHE_TTL_MS: int = 7 * 24 * 60 * 60 * 1000
CACHE_EVICTION_RATIO: float = 0.2
# Emulated storage quota for the sqlite blob store (localStorage-sized).
CACHE_MAX_BYTES: int = 5 * 1024 * 1024
CACHE_DB_NAME = "offline-cache.db"


def resolve_content_root() -> str | None:
    """Return the content root (URL or directory), or None if none is found."""
    override = os.environ.get(CONTENT_ROOT_ENV)
    if override:
        return override
    for candidate in CONTENT_DIRECTORIES:
        if candidate.is_dir():
            return str(candidate)
    return None


def resolve_data_directory() -> Path:
    """Return the directory holding the offline cache database."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
