"""
Shared fixtures: small documents shaped like the three live sources.

The stats and type pages follow the Bulbapedia table layouts, the usage
report follows the Smogon text layout. Names overlap only partially so the
inner join drops rows from every source.
"""

import numpy as np
import pandas as pd
import pytest

from pokecorr.download.fetcher import FetchedDocument


# name, HP, Atk, Def, SpA, SpD, Speed
BASE_STATS = [
    ("Bulbasaur", 45, 49, 49, 65, 65, 45),
    ("Charizard", 78, 84, 78, 109, 85, 100),
    ("Poliwrath", 90, 95, 95, 70, 90, 70),
    ("Ditto", 48, 48, 48, 48, 48, 48),
    ("Arceus", 120, 120, 120, 120, 120, 120),
    ("Garchomp", 108, 130, 95, 80, 85, 102),
    ("Ferrothorn", 74, 94, 131, 54, 116, 20),
    ("Toxapex", 50, 63, 152, 53, 142, 35),
    ("Heatran", 91, 90, 106, 130, 106, 77),
    ("Magearna", 80, 95, 115, 130, 115, 65),
    ("Clefable", 95, 70, 73, 95, 90, 60),
    ("Tapu Koko", 70, 115, 85, 95, 75, 130),
    ("Landorus", 89, 125, 90, 115, 80, 101),
    ("Mimikyu", 55, 90, 80, 50, 105, 96),
    ("Volcarona", 85, 60, 65, 135, 105, 100),
    ("Gliscor", 75, 95, 125, 45, 75, 95),
    ("Rotom", 50, 50, 77, 95, 77, 91),
    ("Flabébé", 44, 38, 39, 61, 79, 42),
]

# (generation section, name, type1, type2); None renders as a colspan=2 cell
TYPE_ROWS = [
    (1, "Bulbasaur", "Grass", "Poison"),
    (1, "Charmander", "Fire", "Fire"),
    (1, "Charizard", "Fire", "Flying"),
    (1, "Poliwrath", "Water", "Fighting"),
    (1, "Ditto", "Normal", None),
    (4, "Garchomp", "Dragon", "Ground"),
    (4, "Heatran", "Fire", "Steel"),
    (4, "Gliscor", "Ground", "Flying"),
    (4, "Rotom", "Electric", "Ghost"),
    (4, "Arceus", "Normal", None),
    (5, "Ferrothorn", "Grass", "Steel"),
    (5, "Volcarona", "Bug", "Fire"),
    (5, "Landorus", "Ground", "Flying"),
    (6, "Clefable", "Fairy", None),
    (6, "Flabébé", "Fairy", None),
    (7, "Toxapex", "Poison", "Water"),
    (7, "Tapu Koko", "Electric", "Fairy"),
    (7, "Mimikyu", "Ghost", "Fairy"),
    (7, "Magearna", "Steel", "Fairy"),
]

USAGE_NAMES = [
    "Landorus-Therian", "Toxapex", "Ferrothorn", "Heatran", "Magearna",
    "Clefable", "Tapu Koko", "Garchomp", "Mimikyu", "Volcarona",
    "Gliscor", "Rotom", "Charizard", "Poliwrath", "Arceus", "Flabébé",
]

USAGE_RULE = " + ---- + ------------------ + --------- + ------ + ------- + ------ + ------- + "

MERGED_NAMES = set(USAGE_NAMES) & {r[0] for r in BASE_STATS} & {r[1] for r in TYPE_ROWS}


def usage_real_count(rank: int) -> int:
    """Real count for a rank; rank 30 lands on the reference value."""
    return 162853 + (30 - rank) * 5000


def make_stats_html(rows=None) -> str:
    rows = rows if rows is not None else BASE_STATS
    body = []
    for i, (name, *stats) in enumerate(rows, start=1):
        cells = list(stats)
        if len(cells) == 6:
            total = sum(cells)
            cells = cells + [total, f"{total / 6:.2f}"]
        tds = "".join(f"<td>{v}</td>" for v in cells)
        body.append(
            f'<tr><td>{i:04d}</td><td><img src="/sprite/{i}.png"/></td>'
            f'<td><a href="/wiki/{name}">{name}</a></td>{tds}</tr>'
        )
    return f"""<html><body>
<table class="navbox"><tr><td>Lists of Pokémon</td></tr></table>
<table class="sortable roundy">
<thead><tr><th>#</th><th colspan="2">Pokémon</th><th>HP</th><th>Attack</th><th>Defense</th>
<th>Sp. Atk</th><th>Sp. Def</th><th>Speed</th><th>Total</th><th>Average</th></tr></thead>
<tbody>
{chr(10).join(body)}
</tbody>
</table>
</body></html>"""


def make_types_html(rows=None) -> str:
    rows = rows if rows is not None else TYPE_ROWS
    sections = []
    for gen in sorted({r[0] for r in rows}):
        trs = []
        for i, (_, name, type1, type2) in enumerate([r for r in rows if r[0] == gen], start=1):
            if type2 is None:
                type_cells = f'<td colspan="2">{type1}</td>'
            else:
                type_cells = f"<td>{type1}</td><td>{type2}</td>"
            trs.append(f'<tr><td>#{gen}{i:03d}</td><td><img src="/ms/{name}.png"/></td>'
                       f'<td><a href="/wiki/{name}">{name}</a></td>{type_cells}</tr>')
        sections.append(f"""<h3>Generation {gen}</h3>
<table class="roundy">
<tr><th>Ndex</th><th>MS</th><th>Pokémon</th><th colspan="2">Type</th></tr>
{chr(10).join(trs)}
</table>""")
    return "<html><body>\n" + "\n".join(sections) + "\n</body></html>"


def make_usage_report(names=None, total_rows: int = 35) -> str:
    names = names if names is not None else USAGE_NAMES
    lines = [
        " Total battles: 1234567",
        " Avg. weight/team: 0.65",
        USAGE_RULE,
        " | Rank | Pokemon            | Usage %   | Raw    | %       | Real   | %       | ",
        USAGE_RULE,
    ]
    for rank in range(1, total_rows + 1):
        name = names[rank - 1] if rank <= len(names) else f"Filler{rank:02d}"
        real = usage_real_count(rank)
        raw = real + 20000
        lines.append(
            f" | {rank:<4} | {name:<18} | {real / 1e4:.5f}% | {raw:<6} | {raw / 1e4:.3f}% "
            f"| {real:<6} | {real / 1e4:.3f}% | "
        )
    lines.append(USAGE_RULE)
    return "\n".join(lines) + "\n"


def make_documents(stats_html=None, usage_text=None, types_html=None):
    return {
        "stats": FetchedDocument.from_text("stats", "https://example.test/stats", stats_html or make_stats_html()),
        "usage": FetchedDocument.from_text("usage", "https://example.test/usage", usage_text or make_usage_report()),
        "types": FetchedDocument.from_text("types", "https://example.test/types", types_html or make_types_html()),
    }


def make_synthetic_merged(n: int = 120, seed: int = 42) -> pd.DataFrame:
    """Merged-shaped data where higher totals go with better (lower) rank."""
    rng = np.random.default_rng(seed)
    types = ["Water", "Fire", "Grass", "Steel", "Fairy", "Dragon"]

    stats = rng.integers(40, 140, size=(n, 6))
    total = stats.sum(axis=1)
    order = np.argsort(-(total + rng.normal(0, 40, n)), kind="stable")
    rank = np.empty(n, dtype=int)
    rank[order] = np.arange(1, n + 1)

    df = pd.DataFrame(stats, columns=["HP", "Atk", "Def", "SpA", "SpD", "Speed"])
    df.insert(0, "name", [f"Mon{i:03d}" for i in range(n)])
    df["total"] = total
    df["average"] = total / 6
    df["rank"] = rank
    df["usage_pct"] = (n - rank + 1) / (n * 2)
    df["raw"] = (n - rank + 1) * 1000
    df["raw_pct"] = df["usage_pct"]
    df["real"] = (n - rank + 1) * 900
    df["real_pct"] = df["usage_pct"]
    df["type1"] = [types[i % len(types)] for i in range(n)]
    df["type2"] = [None if i % 3 == 0 else types[(i + 1) % len(types)] for i in range(n)]
    for col in ["HP", "Atk", "Def", "SpA", "SpD", "Speed"]:
        df[f"s_{col}"] = df[col] / df["total"]
    df["has_type2"] = df["type2"].notna()
    return df


@pytest.fixture
def stats_html():
    return make_stats_html()


@pytest.fixture
def types_html():
    return make_types_html()


@pytest.fixture
def usage_text():
    return make_usage_report()


@pytest.fixture
def documents():
    return make_documents()


@pytest.fixture
def synthetic_merged():
    return make_synthetic_merged()
