from __future__ import annotations

import pytest


COMMONS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<publicwhip scraperversion="a" latest="yes">
<!-- Oral questions -->
<oral-heading id="uk.org.publicwhip/debate/2024-05-01a.1.0" nospeaker="true">Oral Answers to Questions</oral-heading>
<major-heading id="uk.org.publicwhip/debate/2024-05-01a.1.1" nospeaker="true">Treasury</major-heading>
<speech id="uk.org.publicwhip/debate/2024-05-01a.1.2" speakername="Jane Doe" person_id="uk.org.publicwhip/person/10001" time="11:30:00">
  <p pid="a1.2/1">The Chancellor of the Exchequer was asked&#8212;</p>
</speech>
<minor-heading id="uk.org.publicwhip/debate/2024-05-01a.1.3">Inflation</minor-heading>
<speech id="uk.org.publicwhip/debate/2024-05-01a.1.4" speakername="John Roe" person_id="uk.org.publicwhip/person/10002" time="11:31:00">
  <p pid="a1.4/1">What assessment [<i>Interruption.</i>] has he made of inflation?</p>
</speech>
<speech id="uk.org.publicwhip/debate/2024-05-01a.1.5" speakername="Mr Speaker" person_id="uk.org.publicwhip/person/10003" time="11:32:00">
  <p pid="a1.5/1">I call the Minister.</p>
</speech>
<speech id="uk.org.publicwhip/debate/2024-05-01a.1.6" speakername="Ann Minister" person_id="uk.org.publicwhip/person/10004" time="11:33:00">
  <p pid="a1.6/1">Thank you.</p>
  <p pid="a1.6/2">Inflation has fallen.</p>
</speech>
<speech id="uk.org.publicwhip/debate/2024-05-01a.1.7" speakername="Several hon. Members" time="11:34:00">
  <p pid="a1.7/1">Hear, hear.</p>
</speech>
</publicwhip>
"""


@pytest.fixture()
def commons_xml() -> str:
    return COMMONS_XML
