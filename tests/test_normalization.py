from __future__ import annotations

import logging
from pathlib import Path

import pytest

import stripperxml
from stripperxml.codec import XSScale
from stripperxml.errors import ArityError, StructuralError
from stripperxml.normalization import Normalization, XSection

FIXTURES = Path(__file__).parent / "fixtures"

XS_NEG = """<XSection>
 <XSNeg> 687.103,0.978277 </XSNeg>
 <MaxWeightNeg> 796475 </MaxWeightNeg>
 <TotalEventsNeg> 488338734 </TotalEventsNeg>
 <AcceptedEventsNeg> 493310 </AcceptedEventsNeg>
 <FactorNeg> 803.98,1.14468 </FactorNeg>
</XSection>"""

XS_POS = XS_NEG.replace("Neg>", "Pos>")


@pytest.mark.parametrize("text,variant", [(XS_NEG, "Neg"), (XS_POS, "Pos")])
def test_xsection_both_spellings(text, variant):
    xs = XSection.from_xml(text)
    assert xs.xs == XSScale(687.103, 0.978277)
    assert xs.max_weight == 796475.0
    assert xs.total_events == 488338734
    assert xs.accepted_events == 493310
    assert xs.factor == "803.98,1.14468"
    assert xs.variant == variant


def test_xsection_pos_wins_when_both_present(caplog):
    text = XS_POS.replace("</XSection>", "<XSNeg> 1,2 </XSNeg></XSection>")
    with caplog.at_level(logging.WARNING, logger="stripperxml.normalization"):
        xs = XSection.from_xml(text)
    assert xs.xs == XSScale(687.103, 0.978277)
    assert xs.variant == "Pos"
    assert "XSPos" in caplog.text


def test_xsection_missing_field():
    text = XS_NEG.replace("<FactorNeg> 803.98,1.14468 </FactorNeg>", "")
    with pytest.raises(StructuralError):
        XSection.from_xml(text)


def test_xsection_bad_pair():
    with pytest.raises(ArityError):
        XSection.from_xml(XS_NEG.replace("687.103,0.978277", "687.103,0.978277,1"))


def test_normalization_document():
    norm = stripperxml.loads((FIXTURES / "normalization_neg.xml").read_bytes())
    assert isinstance(norm, Normalization)
    assert norm.name == "Cm"
    assert norm.contribution.name == "Cm"
    assert norm.contribution.xsection == XSScale(687.103, 0.978277)
    assert norm.contribution.rw.rwentry == ["x1", "x2", "log(muR**2)", "log(muF**2)"]
    assert norm.xsection.xs == XSScale(687.103, 0.978277)
    assert norm.xsection.max_weight == 796475.0
    assert norm.xsection.accepted_events == 493310
    assert norm.xsection.total_events == 488338734
    assert norm.xsection.factor == "803.98,1.14468"
    # kept verbatim, not parsed
    assert norm.number_of_rejected_events == "0 , 100"


def test_normalization_round_trip_keeps_variant():
    norm = Normalization.from_xml((FIXTURES / "normalization_neg.xml").read_text(encoding="utf-8"))
    text = stripperxml.dumps(norm)
    assert "<XSNeg>" in text
    assert "<XSPos>" not in text
    assert Normalization.from_xml(text) == norm


def test_xsection_rejects_unknown_variant():
    with pytest.raises(ValueError):
        XSection(variant="Both").to_element()


def test_dumps_options_apply_to_normalization():
    norm = Normalization.from_xml((FIXTURES / "normalization_neg.xml").read_text(encoding="utf-8"))
    text = stripperxml.dumps(norm, declaration=True, generator=("STRIPPER", "v0.1"))
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<Normalization')
    assert "Record generated" not in text
    assert Normalization.from_xml(text) == norm
