"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")

HEADER = "GENE\tPOSITION\tCODING SEQUENCE\tPROTEIN SEQUENCE\tISSUE\tACTION"

# Issue/action texts appear only on the first row of each group
TABLE19_ROWS = [
    "FREM2\tchr13:39424253\tc.6458_6459delCTinsGC\tp.Thr2153Ser\tAmbiguous annotation\tRetained in analysis",
    "ZNF611\tchr19:53209553\tc.754_755delCCinsAT\tp.Pro252Ile\t\t",
    "PSD3\tchr8:18729817\tc.556_557delACinsCT\tp.Thr186Leu\t\t",
    "ZNF853\tchr7:6656830\tc.22G>A\tp.Gly8Arg\tMissing REVEL scores\tPrioritized using CADD-PHRED",
    "\tchr7:6656897\tc.89A>G\tp.Gln30Arg\t\t",
    "TEX38\tchr1:47139117\tc.610T>A\tp.Ser204Thr\t\t",
    "PKD1L3\tchr16:72003952\tc.2006C>G\tp.Thr669Ser\t\t",
    "PCDHB6\tchr5:140531175\tc.1337T>C\tp.Val446Ala\tMissing LoGoFunc scores.\tSubstituted with LOEUF scores",
    "LAMA3\tchr18:21511089\tc.8500A>G\tp.Ser2834Gly\t\t",
    "PTPN13\tchr4:87622624\tc.865G>A\tp.Gly289Ser\t\t",
]


@pytest.fixture
def table19_text() -> str:
    return "\n".join([HEADER, *TABLE19_ROWS]) + "\n"
