"""Crée des dossiers de démonstration (sources / choix) pour fuzzyrename."""

from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"

SOURCES = ["Super Mario Bros.png", "Zelda - Link's Awakening.png", "Metroid Prime.png", "Tetris.png"]
CHOICES = [
    "Super Mario Bros. (World).zip",
    "Legend of Zelda, The - Link's Awakening (USA).zip",
    "Metroid Prime (USA).zip",
    "Kirby's Dream Land (USA).zip",
]

for folder, names in (("sources", SOURCES), ("choices", CHOICES)):
    target = DATA_DIR / folder
    target.mkdir(parents=True, exist_ok=True)
    for name in names:
        (target / name).write_bytes(b"")

print(f"Dossiers créés dans {DATA_DIR}")
print(f"Essai: fuzzyrename match -s {DATA_DIR / 'sources'} -C {DATA_DIR / 'choices'}")
