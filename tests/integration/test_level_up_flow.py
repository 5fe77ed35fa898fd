"""Integration tests for a character's life at the table.

Tests the complete flow: create, fight, use resources, rest, level up,
save and load, with the progression check passing at every step.
"""

from __future__ import annotations

from chaos_sheet.engine import (
    adjust_ga_on_pv_crossing,
    apply_damage_with_crossing,
    apply_delta_to_pp,
    apply_level_up,
    calculate_rest_ga_recovery,
    create_character,
    heal_guard,
    heal_vitality,
    load_character,
    preview_level_up_gains,
    resolve_character_state,
    sync_dying_with_vitality,
    use_resource,
    validate_progression,
)
from chaos_sheet.models import (
    ArchetypeName,
    AttributeSet,
    Character,
    CharacterClass,
    CombatState,
    LevelUpGainType,
    SpecialGain,
)


def _apply_hit(character: Character, amount: int) -> None:
    result = apply_damage_with_crossing(character.guard, character.vitality, amount)
    character.guard = result.guard
    character.vitality = result.vitality
    character.dying = sync_dying_with_vitality(
        character.dying, character.vitality.current, character.attributes.body
    )
    character.combat_state = resolve_character_state(character)


class TestCombatFlow:
    """Test damage, dying and recovery on a created character."""

    def test_fight_and_rest(self, isolated_env: None) -> None:
        """Take hits down to zero Vitality, then recover."""
        character = create_character(
            "Ayla", AttributeSet(body=3, essence=1), ArchetypeName.COMBATANT
        )

        _apply_hit(character, 10)
        assert character.combat_state == CombatState.NORMAL
        assert character.guard.current == 8

        _apply_hit(character, 10)
        assert character.guard.current == 0
        assert character.vitality.current == 4
        assert character.combat_state == CombatState.DIRECT_WOUND

        _apply_hit(character, 20)
        assert character.vitality.current == 0
        assert character.dying.is_dying is True
        assert character.combat_state == CombatState.DYING

        recovery = calculate_rest_ga_recovery(character.level, character.attributes.body)
        healed = heal_vitality(character.vitality, recovery + 2)
        character.vitality = healed.vitality
        character.guard = heal_guard(character.guard, healed.remaining_recovery)
        character.guard = character.guard.model_copy(
            update={
                "current": adjust_ga_on_pv_crossing(
                    character.guard.current,
                    character.guard.max,
                    pv_was_zero=True,
                    pv_is_zero=character.vitality.current == 0,
                )
            }
        )
        character.dying = sync_dying_with_vitality(
            character.dying, character.vitality.current, character.attributes.body
        )
        character.combat_state = resolve_character_state(character)

        assert character.vitality.current == 1
        assert character.dying.is_dying is False
        assert character.combat_state == CombatState.DIRECT_WOUND
        assert character.guard.current == 9

        character.power_points = apply_delta_to_pp(character.power_points, -3)
        assert character.power_points.current == 1

    def test_resources_run_out(self, isolated_env: None, fixed_roller) -> None:
        """Use water until it is gone."""
        character = create_character("Ayla")
        water = character.resource_dice[0]
        roller = fixed_roller(6, 9, 1)

        water, _ = use_resource(water, roller)
        water, _ = use_resource(water, roller)
        water, result = use_resource(water, roller)

        assert result.is_depleted is True
        assert water.is_depleted is True
        character.resource_dice[0] = water
        assert load_character(character.model_dump(mode="json")).resource_dice[0].is_depleted


class TestProgressionFlow:
    """Test levelling a character from 1 to 4."""

    def test_level_one_to_four(self, isolated_env: None) -> None:
        """Level up three times across two archetypes and take a class."""
        character = create_character(
            "Mira", AttributeSet(agility=3, essence=2), ArchetypeName.ROGUE
        )
        assert validate_progression(character).valid

        for archetype, gain in [
            (ArchetypeName.ROGUE, SpecialGain(type=LevelUpGainType.TALENT, name="Quick Hands")),
            (ArchetypeName.SORCERER, SpecialGain(type=LevelUpGainType.FEATURE, name="Spark")),
            (ArchetypeName.ROGUE, SpecialGain(type=LevelUpGainType.COMPETENCE, name="Locks")),
        ]:
            character.experience = character.experience.model_copy(
                update={"current": character.experience.to_next_level}
            )
            preview = preview_level_up_gains(character, archetype)
            assert preview.can_afford

            working = character.model_copy(deep=True)
            apply_level_up(working, archetype, [gain])
            character = load_character(working.model_dump(mode="json"))

            assert validate_progression(character).errors == []

        assert character.level == 4
        assert character.total_archetype_levels == 4
        assert character.get_archetype(ArchetypeName.ROGUE).level == 3
        assert character.get_archetype(ArchetypeName.SORCERER).features == ["Spark"]
        assert character.vitality.max == character.guard.max // 3
        assert [entry.level for entry in character.level_history] == [2, 3, 4]

        report = validate_progression(character)
        assert report.warnings == ["A class can be chosen from level 3 onwards."]

        character.classes.append(CharacterClass(name="Duelist", level=1))
        assert validate_progression(character).warnings == []
