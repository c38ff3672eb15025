from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from medalboard.config import Settings

REFERENCE_DATE = date(2024, 8, 11)

ATHLETES_CSV = """code,name,gender,country_code,country_long,disciplines,birth_date
A1,Alice Runner,Female,USA,United States,Athletics,2000-08-15
A2,Bob Swimmer,Male,USA,United States,Swimming,2000-08-10
A3,Chen Diver,Female,CHN,China,Diving,1998-01-02
A4,Nia Boxer,Female,NA,Namibia,Boxing,
"""

MEDALS_CSV = """medal_type,medal_date,name,gender,discipline,event,code,country_code,country_long
Gold Medal,2024-07-28,Alice Runner,Female,Athletics,100m,A1,USA,United States of America
Silver Medal,2024-07-29,Bob Swimmer,Male,Swimming,200m Free,A2,USA,United States of America
Bronze Medal,2024-07-30,Chen Diver,Female,Diving,10m Platform,A3,CHN,China
Gold Medal,2024-08-01,Chen Diver,Female,Diving,Synchro,A3,CHN,China
"""


@pytest.fixture
def athlete_rows():
    return [
        {"code": "A1", "name": "Alice Runner", "gender": "Female", "country_code": "USA",
         "country_long": "United States", "disciplines": "Athletics", "birth_date": "2000-08-15"},
        {"code": "A2", "name": "Bob Swimmer", "gender": "Male", "country_code": "USA",
         "country_long": "United States", "disciplines": "Swimming", "birth_date": "2000-08-10"},
    ]


@pytest.fixture
def medal_rows():
    return [
        {"medal_type": "Gold Medal", "code": "A1", "country_code": "USA", "discipline": "Athletics"},
        {"medal_type": "Silver Medal", "code": "A2", "country_code": "USA", "discipline": "Swimming"},
    ]


@pytest.fixture
def csv_sources(tmp_path: Path):
    athletes = tmp_path / "athletes.csv"
    medals = tmp_path / "medals.csv"
    athletes.write_text(ATHLETES_CSV, encoding="utf-8")
    medals.write_text(MEDALS_CSV, encoding="utf-8")
    return athletes, medals


@pytest.fixture
def settings(csv_sources):
    athletes, medals = csv_sources
    return Settings(athletes_source=str(athletes), medals_source=str(medals), reference_date=REFERENCE_DATE)
