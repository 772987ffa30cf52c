"""
Tests for edit plan validation
"""
import json

from domain.langgraph.nodes.update.plan_validator import EditPlan, validate_edit_plan


VALID_PLAN = {
    "sectionsToUpdate": [{"title": "Scope", "reasoning": "Scope changes"}],
    "updatedSections": [{"title": "Scope", "content": "New scope text"}],
    "summaryOfChanges": ["Rewrote scope"],
}


class TestValidateEditPlan:

    def test_valid_json_string(self):
        plan = validate_edit_plan(json.dumps(VALID_PLAN))

        assert not plan.is_empty
        assert plan.replacements() == {"Scope": "New scope text"}
        assert plan.sections_to_update[0].reasoning == "Scope changes"
        assert plan.summary_of_changes == ["Rewrote scope"]

    def test_valid_dict_and_bytes(self):
        assert validate_edit_plan(VALID_PLAN).replacements() == {"Scope": "New scope text"}
        assert validate_edit_plan(json.dumps(VALID_PLAN).encode("utf-8")).replacements() == {
            "Scope": "New scope text"
        }

    def test_code_fenced_json(self):
        raw = "```json\n" + json.dumps(VALID_PLAN, indent=2) + "\n```"

        plan = validate_edit_plan(raw)

        assert plan.replacements() == {"Scope": "New scope text"}

    def test_empty_lists_are_a_valid_no_op(self):
        plan = validate_edit_plan({"sectionsToUpdate": [], "updatedSections": [], "summaryOfChanges": []})

        assert plan.is_empty
        assert plan.summary_of_changes == []

    def test_missing_updated_sections_is_rejected(self):
        plan = validate_edit_plan({"sectionsToUpdate": [], "summaryOfChanges": ["x"]})

        assert plan.is_empty
        assert plan.replacements() == {}
        assert len(plan.summary_of_changes) == 1
        assert plan.summary_of_changes[0].startswith("Edit plan rejected")
        assert "updatedSections" in plan.summary_of_changes[0]

    def test_invalid_json_is_rejected(self):
        plan = validate_edit_plan("Sure! Here is what I would change: the scope section.")

        assert plan.is_empty
        assert plan.summary_of_changes[0].startswith("Edit plan rejected")

    def test_non_object_json_is_rejected(self):
        plan = validate_edit_plan("[1, 2, 3]")

        assert plan.is_empty
        assert "expected a JSON object" in plan.summary_of_changes[0]

    def test_snake_case_keys_are_rejected(self):
        plan = validate_edit_plan({
            "sections_to_update": [],
            "updated_sections": [{"title": "Scope", "content": "x"}],
            "summary_of_changes": [],
        })

        assert plan.is_empty
        assert plan.summary_of_changes[0].startswith("Edit plan rejected")

    def test_none_is_rejected(self):
        assert validate_edit_plan(None).is_empty

    def test_non_list_field_is_rejected(self):
        data = dict(VALID_PLAN, updatedSections={"title": "Scope", "content": "x"})

        assert validate_edit_plan(data).is_empty

    def test_blank_content_rejects_whole_plan(self):
        data = dict(VALID_PLAN, updatedSections=[
            {"title": "Scope", "content": "fine"},
            {"title": "Risks", "content": "   "},
        ])

        plan = validate_edit_plan(data)

        assert plan.is_empty
        assert plan.replacements() == {}

    def test_missing_title_rejects_whole_plan(self):
        data = dict(VALID_PLAN, updatedSections=[{"content": "no title"}])

        assert validate_edit_plan(data).is_empty

    def test_non_string_content_is_rejected(self):
        data = dict(VALID_PLAN, updatedSections=[{"title": "Scope", "content": 42}])

        assert validate_edit_plan(data).is_empty


class TestEditPlan:

    def test_empty_factory(self):
        plan = EditPlan.empty("nothing to do")

        assert plan.is_empty
        assert plan.sections_to_update == []
        assert plan.summary_of_changes == ["nothing to do"]

    def test_duplicate_titles_keep_first_entry(self):
        plan = validate_edit_plan(dict(VALID_PLAN, updatedSections=[
            {"title": "Scope", "content": "first"},
            {"title": "Scope", "content": "second"},
        ]))

        assert plan.replacements() == {"Scope": "first"}

    def test_to_history_uses_wire_names(self):
        history = validate_edit_plan(VALID_PLAN).to_history()

        assert history == VALID_PLAN
