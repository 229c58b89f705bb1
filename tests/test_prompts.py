import json

import pytest

from models import Category
from prompts import CHECKLISTS, FINDING_FORMAT, build_checklist_prompt


@pytest.mark.parametrize("category", list(Category))
def test_every_category_has_a_checklist(category):
    prompt = build_checklist_prompt(category)
    assert CHECKLISTS[category] in prompt
    assert f"'{category.value}' category ONLY" in prompt
    assert FINDING_FORMAT in prompt


def test_architecture_checklist_covers_solid():
    text = CHECKLISTS[Category.ARCHITECTURE]
    for principle in ("Single responsibility", "Open/closed", "Liskov", "Interface segregation",
                      "Dependency inversion"):
        assert principle in text


def test_format_examples_are_valid_json():
    for line in FINDING_FORMAT.splitlines():
        start = line.find("{")
        if start != -1:
            json.loads(line[start:])
