"""Tests for archetype level-up calculation."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from chaos_sheet.core.exceptions import InsufficientExperienceError
from chaos_sheet.engine.leveling import (
    apply_level_up,
    calculate_guard_gain,
    calculate_power_point_gain,
    determine_gain_type,
    get_archetype_level,
    get_reward_categories,
    preview_level_up_gains,
)
from chaos_sheet.models import (
    AbilitySource,
    ArchetypeName,
    AttributeSet,
    Character,
    LevelUpGainType,
    RewardCategory,
    SpecialGain,
)


class TestGains:
    """Tests for per-level gains."""

    @pytest.mark.parametrize(
        ("archetype", "expected"),
        [
            (ArchetypeName.COMBATANT, 3),
            (ArchetypeName.ROGUE, 2),
            (ArchetypeName.ACOLYTE, 1),
            (ArchetypeName.NATURAL, 2),
            (ArchetypeName.ACADEMIC, 1),
            (ArchetypeName.SORCERER, 1),
        ],
    )
    def test_guard_gain(
        self, fighter_attributes: AttributeSet, archetype: ArchetypeName, expected: int
    ) -> None:
        """Test Guard gain reads the archetype's attribute."""
        assert calculate_guard_gain(archetype, fighter_attributes) == expected

    @pytest.mark.parametrize(
        ("archetype", "expected"),
        [
            (ArchetypeName.COMBATANT, 3),
            (ArchetypeName.ROGUE, 4),
            (ArchetypeName.ACOLYTE, 5),
            (ArchetypeName.NATURAL, 5),
            (ArchetypeName.ACADEMIC, 6),
            (ArchetypeName.SORCERER, 7),
        ],
    )
    def test_power_point_gain(self, archetype: ArchetypeName, expected: int) -> None:
        """Test PP gain is the archetype base plus Essence."""
        assert calculate_power_point_gain(archetype, essence=2) == expected

    def test_archetype_level(self, level_one_fighter: Character) -> None:
        """Test archetype levels, 0 for archetypes not taken."""
        assert get_archetype_level(level_one_fighter, ArchetypeName.COMBATANT) == 1
        assert get_archetype_level(level_one_fighter, ArchetypeName.ROGUE) == 0


class TestRewards:
    """Tests for reward categories."""

    def test_level_one(self) -> None:
        """Test level 1 grants a feature."""
        assert get_reward_categories(1) == frozenset({RewardCategory.FEATURE})

    def test_level_five(self) -> None:
        """Test level 5 grants several categories."""
        assert get_reward_categories(5) == frozenset(
            {
                RewardCategory.FEATURE,
                RewardCategory.SKILL_DEGREE_INCREASE,
                RewardCategory.DEFENSE_STEP,
            }
        )

    def test_level_four(self) -> None:
        """Test level 4 grants a power and an attribute increase."""
        assert get_reward_categories(4) == frozenset(
            {RewardCategory.POWER_OR_TALENT, RewardCategory.ATTRIBUTE_INCREASE}
        )

    @pytest.mark.parametrize("level", [16, 20, 40])
    def test_extended_levels(self, level: int) -> None:
        """Test levels past 15 keep granting a power or talent."""
        assert get_reward_categories(level) == frozenset({RewardCategory.POWER_OR_TALENT})

    def test_no_rewards(self) -> None:
        """Test level 0 unlocks nothing."""
        assert get_reward_categories(0) == frozenset()

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (1, LevelUpGainType.FEATURE),
            (2, LevelUpGainType.POWER),
            (3, LevelUpGainType.COMPETENCE),
            (10, LevelUpGainType.FEATURE),
            (16, LevelUpGainType.POWER),
        ],
    )
    def test_gain_type(self, level: int, expected: LevelUpGainType) -> None:
        """Test the headline gain of each level."""
        assert determine_gain_type(level) == expected


class TestPreview:
    """Tests for preview_level_up_gains."""

    def test_fighter_to_level_two(self, level_one_fighter: Character) -> None:
        """Test a combatant with Body 3 and Essence 1 going to level 2."""
        preview = preview_level_up_gains(level_one_fighter, ArchetypeName.COMBATANT)

        assert preview.new_character_level == 2
        assert preview.new_archetype_level == 2
        assert preview.ga_gained == 3
        assert preview.pp_gained == 2
        assert preview.new_ga_max == 21
        assert preview.new_pp_max == 6
        assert preview.new_pv_max == 7
        assert preview.remaining_xp == 10
        assert preview.grants_power_or_talent is True
        assert preview.grants_feature is False
        assert preview.unlocks_classes is False
        assert preview.can_afford is True

    def test_new_archetype(self, level_one_fighter: Character) -> None:
        """Test multiclassing into a new archetype starts it at level 1."""
        preview = preview_level_up_gains(level_one_fighter, ArchetypeName.SORCERER)

        assert preview.new_archetype_level == 1
        assert preview.grants_feature is True
        assert preview.ga_gained == 1
        assert preview.pp_gained == 6

    def test_character_untouched(self, level_one_fighter: Character) -> None:
        """Test previewing does not change the character."""
        before = level_one_fighter.model_dump()

        preview_level_up_gains(level_one_fighter, ArchetypeName.COMBATANT)

        assert level_one_fighter.model_dump() == before

    def test_unaffordable(self, fresh_character: Character) -> None:
        """Test a negative remainder when XP is short."""
        preview = preview_level_up_gains(fresh_character, ArchetypeName.ROGUE)

        assert preview.remaining_xp == -50
        assert preview.can_afford is False

    def test_class_unlock_level(self, level_one_fighter: Character) -> None:
        """Test the level that reaches 3 unlocks classes."""
        apply_level_up(level_one_fighter, ArchetypeName.COMBATANT)

        preview = preview_level_up_gains(level_one_fighter, ArchetypeName.COMBATANT)

        assert preview.new_character_level == 3
        assert preview.unlocks_classes is True
        assert preview.grants_competence is True


class TestApplyLevelUp:
    """Tests for apply_level_up."""

    def test_commits_preview(self, level_one_fighter: Character) -> None:
        """Test the committed values match the preview."""
        preview = preview_level_up_gains(level_one_fighter, ArchetypeName.COMBATANT)

        committed = apply_level_up(level_one_fighter, ArchetypeName.COMBATANT)

        assert committed == preview
        assert level_one_fighter.level == 2
        assert level_one_fighter.get_archetype(ArchetypeName.COMBATANT).level == 2
        assert level_one_fighter.guard.max == 21
        assert level_one_fighter.guard.current == 21
        assert level_one_fighter.power_points.max == 6
        assert level_one_fighter.power_points.current == 6
        assert level_one_fighter.vitality.max == 7

    def test_vitality_not_healed(self, level_one_fighter: Character) -> None:
        """Test current Vitality is kept, not raised to the new max."""
        apply_level_up(level_one_fighter, ArchetypeName.COMBATANT)

        assert level_one_fighter.vitality.current == 6

    def test_experience_carried(self, level_one_fighter: Character) -> None:
        """Test leftover XP carries over and the next cost is set."""
        apply_level_up(level_one_fighter, ArchetypeName.COMBATANT)

        assert level_one_fighter.experience.current == 10
        assert level_one_fighter.experience.to_next_level == 125

    def test_spell_points_mirror_power_points(self, level_one_fighter: Character) -> None:
        """Test spell point max follows the PP max."""
        apply_level_up(level_one_fighter, ArchetypeName.COMBATANT)

        assert level_one_fighter.spell_points.max == 6

    def test_new_archetype_added(self, level_one_fighter: Character) -> None:
        """Test a new archetype entry is appended at level 1."""
        apply_level_up(level_one_fighter, ArchetypeName.ROGUE)

        assert level_one_fighter.get_archetype(ArchetypeName.ROGUE).level == 1
        assert level_one_fighter.total_archetype_levels == level_one_fighter.level

    def test_special_gains_recorded(self, level_one_fighter: Character) -> None:
        """Test chosen gains become abilities and history entries."""
        gain = SpecialGain(
            type=LevelUpGainType.POWER,
            name="Shield Bash",
            description="Knock a foe back.",
        )

        apply_level_up(level_one_fighter, ArchetypeName.COMBATANT, [gain])

        ability = level_one_fighter.special_abilities[-1]
        assert ability.name == "Shield Bash"
        assert ability.source == AbilitySource.POWER
        assert ability.source_name == "Combatant"
        assert ability.level_gained == 2

        history = level_one_fighter.level_history[-1]
        assert history.level == 2
        assert history.archetype == ArchetypeName.COMBATANT
        assert history.gain_type == LevelUpGainType.POWER
        assert history.gain_name == "Shield Bash"

        progression = level_one_fighter.level_progression[-1]
        assert progression.level == 2
        assert "Archetype: Combatant (level 2)" in progression.gains
        assert "+3 GA" in progression.gains
        assert "+2 PP" in progression.gains
        assert "Power/Talent: Shield Bash" in progression.gains

    def test_feature_gain_listed_on_archetype(self, level_one_fighter: Character) -> None:
        """Test a feature gain is added to the archetype's features."""
        gain = SpecialGain(type=LevelUpGainType.FEATURE, name="Arcane Spark")

        apply_level_up(level_one_fighter, ArchetypeName.SORCERER, [gain])

        assert level_one_fighter.get_archetype(ArchetypeName.SORCERER).features == ["Arcane Spark"]
        assert level_one_fighter.special_abilities[-1].source == AbilitySource.ARCHETYPE_FEATURE

    def test_without_gains(self, level_one_fighter: Character) -> None:
        """Test a level-up with no chosen gains still records history."""
        apply_level_up(level_one_fighter, ArchetypeName.COMBATANT)

        assert level_one_fighter.special_abilities == []
        assert level_one_fighter.level_history[-1].gain_name is None

    def test_lenient_without_experience(self, fresh_character: Character) -> None:
        """Test an unaffordable level is committed with a warning by default."""
        with capture_logs() as logs:
            preview = apply_level_up(fresh_character, ArchetypeName.ROGUE)

        assert preview.remaining_xp == -50
        assert fresh_character.level == 2
        assert fresh_character.experience.current == 0
        assert any(entry["log_level"] == "warning" for entry in logs)

    def test_strict_without_experience(self, fresh_character: Character, strict_xp: None) -> None:
        """Test strict mode refuses an unaffordable level and changes nothing."""
        before = fresh_character.model_dump()

        with pytest.raises(InsufficientExperienceError) as exc_info:
            apply_level_up(fresh_character, ArchetypeName.ROGUE)

        assert exc_info.value.details["required_xp"] == 50
        assert exc_info.value.details["current_xp"] == 0
        assert fresh_character.model_dump() == before

    def test_strict_with_experience(self, level_one_fighter: Character, strict_xp: None) -> None:
        """Test strict mode allows an affordable level."""
        apply_level_up(level_one_fighter, ArchetypeName.COMBATANT)

        assert level_one_fighter.level == 2
