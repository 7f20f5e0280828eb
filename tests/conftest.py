"""Test fixtures.

The reference documents are (re)generated under ``tests/fixtures/`` at
configure time so the suite does not depend on shipped data files.
"""

from __future__ import annotations

from pathlib import Path

REF_RECORD = """<?xml version="1.0" encoding="UTF-8"?>
<Eventrecord nevents="2286" nsubevents="2286" nreweights="2286" as="2" name="Bm">
<!--
File generated with STRIPPER v0.1 for online data base
-->
<e>
<se w="-0.0002369763508" muR="91.16253934" muF="91.16253934">
<p id="1,21"> 5780.608219,0,0,5780.608219 </p>
<p id="1,21"> 334.3891359,0,0,-334.3891359 </p>
<p id="0,6"> 357.9061187,-58.25473457,9.621341818,-307.9843429 </p>
<p id="0,-6"> 5757.091237,58.25473457,-9.621341818,5754.203426 </p>
<rw ch="12"> 0.8893243414,0.05144448245,-0.0002369763508 </rw>
</se>
</e>
<e>
<se w="-0.0004385904665" muR="517.0997809" muF="517.0997809">
<p id="1,1"> 327.0442813,0,0,327.0442813 </p>
<p id="1,-1"> 4344.52245,0,0,-4344.52245 </p>
<p id="0,6"> 3334.580936,-386.757619,943.5205498,-3170.151619 </p>
<p id="0,-6"> 1336.985795,386.757619,-943.5205498,-847.3265495 </p>
<rw ch="1"> 0.05031450481,0.6683880692,-0.0004385904665 </rw>
</se>
</e>
<e>
<se w="-2.098171554e-05" muR="1140.717994" muF="1140.717994">
<p id="1,1"> 1610.067985,0,0,1610.067985 </p>
<p id="1,-1"> 4034.720799,0,0,-4034.720799 </p>
<p id="0,6"> 3362.889308,-2194.656814,598.8951393,-2470.642493 </p>
<p id="0,-6"> 2281.899476,2194.656814,-598.8951393,45.98967904 </p>
<rw ch="1"> 0.2477027669,0.6207262768,-2.098171554e-05 </rw>
</se>
</e>
<e>
<se w="-4.834595231e-05" muR="635.8532498" muF="635.8532498">
<p id="1,1"> 1299.986308,0,0,1299.986308 </p>
<p id="1,-1"> 3291.996472,0,0,-3291.996472 </p>
<p id="0,6"> 1510.408466,-1129.902831,557.4950784,814.9210479 </p>
<p id="0,-6"> 3081.574313,1129.902831,-557.4950784,-2806.931212 </p>
<rw ch="1"> 0.1999978935,0.5064609956,-4.834595231e-05 </rw>
</se>
</e>
</Eventrecord>
"""

REF_NORMALIZATION = """<?xml version="1.0" encoding="UTF-8"?>
<Normalization name="Cm">
<!--
File generated with STRIPPER v0.1 for online data base
-->
<XSection>
 <XSNeg> 687.103,0.978277 </XSNeg>
 <MaxWeightNeg> 796475 </MaxWeightNeg>
 <TotalEventsNeg> 488338734 </TotalEventsNeg>
 <AcceptedEventsNeg> 493310 </AcceptedEventsNeg>
 <FactorNeg> 803.98,1.14468 </FactorNeg>
</XSection>
<Contribution name="Cm">
  <xsection> 687.103,0.978277</xsection>
  <rw>
    <rwentry> x1 </rwentry>
    <rwentry> x2 </rwentry>
    <rwentry> log(muR**2) </rwentry>
    <rwentry> log(muF**2) </rwentry>
  </rw>
</Contribution>
<NumberOfRejectedEvents> 0 , 100</NumberOfRejectedEvents>
</Normalization>
"""

REF_INIT = """<?xml version="1.0" encoding="UTF-8"?>
<Init>
  <Incoming> p p with NNPDF31_nnlo_as_0118/0 </Incoming>
  <Scales> muR = HT, muF = HT </Scales>
  <Channels>
    <Channel> 0,5,1,1,2,2,3,3,4,4,5,5 </Channel>
    <Channel> 1,5,1,-1,2,-2,3,-3,4,-4,5,-5 </Channel>
    <Channel> 2,20,1,2,1,3,1,4,1,5,2,1,2,3,2,4,2,5,3,1,3,2,3,4,3,5,4,1,4,2,4,3,4,5,5,1,5,2,5,3,5,4 </Channel>
    <Channel> 3,20,1,-2,1,-3,1,-4,1,-5,2,-1,2,-3,2,-4,2,-5,3,-1,3,-2,3,-4,3,-5,4,-1,4,-2,4,-3,4,-5,5,-1,5,-2,5,-3,5,-4 </Channel>
    <Channel> 4,5,1,21,2,21,3,21,4,21,5,21 </Channel>
    <Channel> 5,5,-1,1,-2,2,-3,3,-4,4,-5,5 </Channel>
    <Channel> 6,5,-1,-1,-2,-2,-3,-3,-4,-4,-5,-5 </Channel>
    <Channel> 7,20,-1,2,-1,3,-1,4,-1,5,-2,1,-2,3,-2,4,-2,5,-3,1,-3,2,-3,4,-3,5,-4,1,-4,2,-4,3,-4,5,-5,1,-5,2,-5,3,-5,4 </Channel>
    <Channel> 8,20,-1,-2,-1,-3,-1,-4,-1,-5,-2,-1,-2,-3,-2,-4,-2,-5,-3,-1,-3,-2,-3,-4,-3,-5,-4,-1,-4,-2,-4,-3,-4,-5,-5,-1,-5,-2,-5,-3,-5,-4 </Channel>
    <Channel> 9,5,-1,21,-2,21,-3,21,-4,21,-5,21 </Channel>
    <Channel> 10,5,21,1,21,2,21,3,21,4,21,5 </Channel>
    <Channel> 11,5,21,-1,21,-2,21,-3,21,-4,21,-5 </Channel>
    <Channel> 12,1,21,21 </Channel>
  </Channels>
</Init>
"""


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def pytest_configure(config):  # noqa: D401
    """Ensure fixtures exist before any tests run."""

    fixtures = Path(__file__).resolve().parent / "fixtures"
    _write_text(fixtures / "ttbar_record.xml", REF_RECORD)
    _write_text(fixtures / "normalization_neg.xml", REF_NORMALIZATION)
    _write_text(fixtures / "init.xml", REF_INIT)
