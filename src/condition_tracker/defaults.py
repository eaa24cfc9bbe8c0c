"""
Default seed data for a fresh install.

DEFAULT_CONDITIONS uses D&D 5e conditions, senses and common combat states.
Description items may hold inline HTML; cross references are links that call
the conditions command for the referenced entry.
"""

from .models import ConditionDefinition, MarkerDefinition


def _link(target: str, label: str | None = None) -> str:
    """Render a link that sends the condition card for ``target`` to chat."""
    return f'<a href="!ct conditions|{target}">{label or target}</a>'


# Built-in color markers every campaign has alongside its custom marker set.
BUILTIN_MARKERS: list[MarkerDefinition] = [
    MarkerDefinition(name=color)
    for color in ("red", "blue", "green", "brown", "purple", "pink", "yellow", "dead")
]


DEFAULT_CONDITIONS: list[ConditionDefinition] = [
    ConditionDefinition(
        name="Advantage",
        description=[
            "A creature that has advantage rolls a second d20 when making an ability check, saving throw, or attack roll, and uses the <b>higher</b> of the two rolls.",
            "If multiple situations affect a roll and each one grants advantage or imposes disadvantage, the creature doesn't roll more than one additional d20.",
            "If circumstances cause a roll to have both advantage and disadvantage, the creature is considered to have neither of them, and they roll one d20. This is true even if multiple circumstances impose disadvantage and only one grants advantage or vice versa.",
            "When the creature has advantage or disadvantage and something in the game, such as the halfling's Lucky trait, lets the creature reroll or replace the d20, the creature can reroll or replace only one of the dice. The creature chooses which one.",
        ],
    ),
    ConditionDefinition(
        name="Blinded",
        description=[
            "A blinded creature can't see and automatically fails any ability check that requires sight.",
            f"Attack rolls against the creature have {_link('advantage')}, and the creature's attack rolls have {_link('disadvantage')}.",
        ],
    ),
    ConditionDefinition(
        name="Blindsight",
        description=[
            "A creature with blindsight can perceive its surroundings without relying on sight, within a specific radius.",
        ],
    ),
    ConditionDefinition(
        name="Carrying Capacity",
        description=[
            "A creature's carrying capacity is equal to 15 x their Strength score.",
        ],
    ),
    ConditionDefinition(
        name="Charmed",
        description=[
            "A charmed creature can't attack the charmer or target the charmer with harmful abilities or magical effects.",
            f"The charmer has {_link('advantage')} on any ability check to interact socially with the creature.",
        ],
    ),
    ConditionDefinition(
        name="Concentrating",
        description=[
            "The following effects can end concentration:",
            "<b>Casting another spell that requires concentration</b>.",
            "<b>Taking damage</b>. The creature that is concentrating must make a Constitution saving throw with a DC equal to 10 or half the damage taken, whichever is higher. Multiple sources of damage require multiple saving throws.",
            "<b>Being incapacitated or killed</b>.",
        ],
    ),
    ConditionDefinition(
        name="Darkvision",
        description=[
            "A creature with darkvision can see in the dark within a specific radius.",
            "The creature can see in dim light within the radius as if it were bright light, and in darkness as if it were dim light.",
            "The creature can't discern color in darkness, only shades of gray.",
        ],
    ),
    ConditionDefinition(
        name="Deafened",
        description=[
            "A deafened creature can't hear and automatically fails any ability check that requires hearing.",
        ],
    ),
    ConditionDefinition(
        name="Dehydrated",
        description=[
            "A character needs one gallon of water per day, or two gallons per day if the weather is hot.",
            f"A character who drinks only half that much water must succeed on a DC 15 Constitution saving throw or suffer one level of {_link('exhaustion')} at the end of the day. A character with access to even less water automatically suffers one level of exhaustion at the end of the day.",
            f"If the character already has one or more levels of {_link('exhaustion')}, the character takes two levels in either case.",
        ],
    ),
    ConditionDefinition(
        name="Disadvantage",
        description=[
            "A creature that has disadvantage rolls a second d20 when making an ability check, saving throw, or attack roll, and uses the <b>lower</b> of the two rolls.",
            "If multiple situations affect a roll and each one grants advantage or imposes disadvantage, the creature doesn't roll more than one additional d20.",
            "If circumstances cause a roll to have both advantage and disadvantage, the creature is considered to have neither of them, and they roll one d20. This is true even if multiple circumstances impose disadvantage and only one grants advantage or vice versa.",
            "When the creature has advantage or disadvantage and something in the game, such as the halfling's Lucky trait, lets the creature reroll or replace the d20, the creature can reroll or replace only one of the dice. The creature chooses which one.",
        ],
    ),
    ConditionDefinition(
        name="Dodge",
        description=[
            f"Until the start of the creature's next turn, any attack rolls made against the creature have {_link('disadvantage')} if the creature can see the attacker, and the creature makes Dexterity saving throws with {_link('advantage')}.",
            "This effect ends if the creature is incapacitated or their speed drops to 0.",
        ],
    ),
    ConditionDefinition(
        name="Encumbered",
        description=[
            "A creature is considered encumbered when their carry weight exceeds 5 x their Strength score.",
            "An encumbered creature's speed drops by 10 feet.",
        ],
    ),
    ConditionDefinition(
        name="Exhaustion",
        description=[
            "Some special abilities and environmental hazards, such as starvation and the long-term effects of freezing or scorching temperatures, can lead to a special condition called exhaustion. Exhaustion is measured in six levels. An effect can give a creature one or more levels of exhaustion, as specified in the effect's description.",
            f"<b>Level 1</b>: {_link('disadvantage', 'Disadvantage')} on ability checks",
            "<b>Level 2</b>: Speed halved",
            f"<b>Level 3</b>: {_link('disadvantage', 'Disadvantage')} on attack rolls and saving throws",
            "<b>Level 4</b>: Hit point maximum halved",
            "<b>Level 5</b>: Speed reduced to 0",
            "<b>Level 6</b>: Death",
            "If an already exhausted creature suffers another effect that causes exhaustion, its current level of exhaustion increases by the amount specified in the effect's description.",
            "A creature suffers the effect of its current level of exhaustion as well as all lower levels. For example, a creature suffering level 2 exhaustion has its speed halved and has disadvantage on ability checks.",
            "An effect that removes exhaustion reduces its level as specified in the effect's description, with all exhaustion effects ending if a creature's exhaustion level is reduced below 1.",
            "Finishing a long rest reduces a creature's exhaustion level by 1, provided that the creature has also ingested some food and drink. Also, being raised from the dead reduces a creature's exhaustion level by 1.",
        ],
    ),
    ConditionDefinition(
        name="Falling",
        description=[
            "At the end of a fall, a creature takes 1d6 bludgeoning damage for every 10 feet it fell, to a maximum of 20d6.",
            f"The creature lands {_link('prone')}, unless it avoids taking damage from the fall.",
        ],
    ),
    ConditionDefinition(
        name="Frightened",
        description=[
            f"A frightened creature has {_link('disadvantage')} on ability checks and attack rolls while the source of its fear is within line of sight.",
            "The creature can't willingly move closer to the source of its fear.",
        ],
    ),
    ConditionDefinition(
        name="Grappled",
        description=[
            "A grappled creature's speed becomes 0, and it can't benefit from any bonus to its speed.",
            f"The condition ends if the grappler is {_link('incapacitated')}.",
            "The condition also ends if an effect removes the grappled creature from the reach of the grappler or grappling effect, such as when a creature is hurled away by the thunderwave spell.",
        ],
    ),
    ConditionDefinition(
        name="Half Cover",
        description=[
            "A creature has half cover if an obstacle blocks at least half of its body.",
            "A creature with half cover has a +2 bonus to AC and Dexterity saving throws.",
        ],
    ),
    ConditionDefinition(
        name="Heavily Encumbered",
        description=[
            "A creature is considered heavily encumbered when their carry weight exceeds 10 x their Strength score, up to their carrying capacity (15 x their Strength score).",
            f"A heavily encumbered creature's speed drops by 20 feet, and they have {_link('disadvantage')} on ability checks, saving throws, and attack rolls that use Strength, Dexterity, or Constitution.",
        ],
    ),
    ConditionDefinition(
        name="Heavily Obscured",
        description=[
            f"A creature effectively suffers from the {_link('blinded')} condition when trying to see something that is or is in an area that is heavily obscured.",
            "Examples of situations that cause a creature to be heavily obscured include darkness, opaque fog, or dense foliage.",
        ],
    ),
    ConditionDefinition(
        name="Hidden",
        description=[
            f"Attacks rolls against a hidden creature are made with {_link('disadvantage')}, and attacks roll made by a hidden creature are made with {_link('advantage')}.",
            "A creature that makes an attack gives away their location when the attack hits or misses.",
        ],
    ),
    ConditionDefinition(
        name="Incapacitated",
        description=[
            "An incapacitated creature can't take actions or reactions.",
        ],
    ),
    ConditionDefinition(
        name="Inspiration",
        description=[
            "If a player has inspiration, they can expend it when they make an attack roll, saving throw, or ability check. Spending inspiration gives a player advantage on that roll.",
            "Additionally, if a player has inspiration, they can reward another player for good roleplaying, clever thinking, or simply doing something exciting in the game. When another player character does something that really contributes to the story in a fun and interesting way, a player can give up their inspiration to give that character inspiration.",
        ],
    ),
    ConditionDefinition(
        name="Invisible",
        description=[
            "An invisible creature is impossible to see without the aid of magic or a special sense. For the purpose of hiding, the creature is heavily obscured. The creature's location can be detected by any noise it makes or any tracks it leaves.",
            f"Attack rolls against the creature have {_link('disadvantage')}, and the creature's attack rolls have {_link('advantage')}.",
        ],
    ),
    ConditionDefinition(
        name="Lightly Obscured",
        description=[
            f"A creature has {_link('disadvantage')} on Wisdom (Perception) checks that rely on sight when trying to see something that is or is in an area that is lightly obscured.",
            "Examples of situations that cause a creature to be lightly obscured include dim light, patchy fog, or moderate foliage.",
        ],
    ),
    ConditionDefinition(
        name="Mounted",
        description=[
            "Once during their movement, a creature can mount or dismount a creature that is within 5 feet of and at least one size larger than themselves.",
            f"If an effect moves a mount against its will while a creature is mounted on it, that creature must succeed on a DC 10 Dexterity saving throw or fall off the mount, landing {_link('prone')} in a space within 5 feet of the mount. A creature that is knocked prone while mounted must make the same saving throw.",
            "If a mount is knocked prone, the creature mounted on it can use their reaction to dismount it as it falls and land on their feet. Otherwise the creature is dismounted and falls prone in a space within 5 feet of the mount.",
            "A creature can either control the mount or allow it to act independently. Intelligent creatures, such as dragons, act independently.",
            "A controlled mount's initiative matches the creatures, moves as directed, and can only take the Dash, Disengage, or Dodge actions.",
            "An independent mount retains its initiative and moves and acts as it wishes.",
            "If a mount provokes an opportunity attack while a creature is mounted on it, the attacker can target the creature or the mount.",
        ],
    ),
    ConditionDefinition(
        name="Paralyzed",
        description=[
            f"A paralyzed creature is {_link('incapacitated')} and can't move or speak.",
            "The creature automatically fails Strength and Dexterity saving throws.",
            f"Attack rolls against the creature have {_link('advantage')}.",
            "Any attack that hits the creature is a critical hit if the attacker is within 5 feet of the creature.",
        ],
    ),
    ConditionDefinition(
        name="Petrified",
        description=[
            "A petrified creature is transformed, along with any nonmagical object it is wearing or carrying, into a solid inanimate substance (usually stone). Its weight increases by a factor of ten, and it ceases aging.",
            f"The creature is {_link('incapacitated')}, can't move or speak, and is unaware of its surroundings.",
            f"Attack rolls against the creature have {_link('advantage')}.",
            "The creature automatically fails Strength and Dexterity saving throws.",
            "The creature has resistance to all damage.",
            "The creature is immune to poison and disease, although a poison or disease already in its system is suspended, not neutralized.",
        ],
    ),
    ConditionDefinition(
        name="Poisoned",
        description=[
            f"A poisoned creature has {_link('disadvantage')} on attack rolls and ability checks.",
        ],
    ),
    ConditionDefinition(
        name="Prone",
        description=[
            "A prone creature's only movement option is to crawl, unless it stands up and thereby ends the condition.",
            f"The creature has {_link('disadvantage')} on attack rolls.",
            f"An attack roll against the creature has {_link('advantage')} if the attacker is within 5 feet of the creature. Otherwise, the attack roll has {_link('disadvantage')}.",
        ],
    ),
    ConditionDefinition(
        name="Push Drag Lift",
        description=[
            f"A creature's maximum weight they can push, drag, or lift is equal to twice their {_link('carrying capacity')}.",
            "When pushing, dragging, or lifting weight in excess of their carrying capacity, a creature's speed drops to 5 feet.",
        ],
    ),
    ConditionDefinition(
        name="Rage",
        description=[
            f"{_link('advantage', 'Advantage')} on Strength checks and Strength saving throws.",
            "When the creature makes a melee weapon attack using Strength, they gain a bonus to the damage roll: +2 at 1st level, +3 at 9th level, and +4 at 16th level.",
            "Resistance to bludgeoning, piercing, and slashing damage.",
        ],
    ),
    ConditionDefinition(
        name="Readied",
        description=[
            "A creature that has readied an action can act using their reaction before the start of their next turn.",
            "When a readied action's trigger occurs, the creature can take their reaction after the trigger finishes or ignore the trigger.",
            f"When a spell is readied, it is cast as normal but the energy is held, which is released with the reaction when the trigger occurs. A spell must have a casting time of 1 action to ready it, and holding onto the spell's magic requires {_link('concentration')}. If the concentration is broken, the spell dissipates without taking effect.",
        ],
    ),
    ConditionDefinition(
        name="Restrained",
        description=[
            "A restrained creature's speed becomes 0, and it can't benefit from any bonus to its speed.",
            f"Attack rolls against the creature have {_link('advantage')}, and the creature's attack rolls have {_link('disadvantage')}.",
            f"The creature has {_link('disadvantage')} on Dexterity saving throws.",
        ],
    ),
    ConditionDefinition(
        name="Starving",
        description=[
            "A character needs one pound of food per day and can make food last longer by subsisting on half rations. Eating half a pound of food in a day counts as half a day without food.",
            f"A character can go without food for a number of days equal to 3 + his or her Constitution modifier (minimum 1). At the end of each day beyond that limit, a character automatically suffers one level of {_link('exhaustion')}. A normal day of eating resets the count of days without food to zero.",
        ],
    ),
    ConditionDefinition(
        name="Stunned",
        description=[
            f"A stunned creature is {_link('incapacitated')}, can't move, and can speak only falteringly.",
            "The creature automatically fails Strength and Dexterity saving throws.",
            f"Attack rolls against the creature have {_link('advantage')}.",
        ],
    ),
    ConditionDefinition(
        name="Suffocating",
        description=[
            "A creature can hold its breath for a number of minutes equal to 1 + its Constitution modifier (minimum of 30 seconds).",
            "When a creature runs out of breath or is choking, it can survive for a number of rounds equal to its Constitution modifier (minimum of 1 round). At the start of its next turn, it drops to 0 hit points and is dying, and it can't regain hit points or be stabilized until it can breathe again.",
            "For example, a creature with a Constitution of 14 can hold its breath for 3 minutes. If it starts suffocating, it has 2 rounds to reach air before it drops to 0 hit points.",
        ],
    ),
    ConditionDefinition(
        name="Surprised",
        description=[
            "A creature that is surprised cannot move or take an action on their first turn of combat, and they cannot take a reaction until their first turn ends.",
        ],
    ),
    ConditionDefinition(
        name="Three Quarters Cover",
        description=[
            "A creature has three-quarters cover if an obstacle blocks at least three-quarters of its body.",
            "A creature with three-quarters cover has a +5 bonus to AC and Dexterity saving throws.",
        ],
    ),
    ConditionDefinition(
        name="Total Cover",
        description=[
            "A creature has total cover if they are completely concealed by an obstacle.",
            "A creature with total cover can't be targeted directly by an attack or spell, although some spells can reach such a target by including it in an area of effect.",
        ],
    ),
    ConditionDefinition(
        name="Tremorsense",
        description=[
            "A creature with tremorsense can detect and pinpoint the origin of vibrations within a specific radius, provided that the creature and the source of the vibrations are in contact with the same ground or substance.",
            "Tremorsense can't be used to detect flying or incorporeal creatures.",
        ],
    ),
    ConditionDefinition(
        name="Truesight",
        description=[
            f"A creature with truesight can, out to a specific range, see in normal and magical darkness, see {_link('invisible')} creatures and objects, automatically detect visual illusions and succeed on saving throws against them, and perceive the original form of a shapechanger or a creature that is transformed by magic.",
            "The creature can see into the Ethereal Plane within the same range.",
        ],
    ),
    ConditionDefinition(
        name="Unconscious",
        description=[
            f"An unconscious creature is {_link('incapacitated')}, can't move or speak, and is unaware of its surroundings.",
            f"The creature drops whatever it's holding and falls {_link('prone')}.",
            "The creature automatically fails Strength and Dexterity saving throws.",
            f"Attack rolls against the creature have {_link('advantage')}.",
            "Any attack that hits the creature is a critical hit if the attacker is within 5 feet of the creature.",
        ],
    ),
]


INSTRUCTIONS_CONTENT = (
    "<h2>Editing the Conditions Table</h2>"
    "<p>When editing the conditions table, keep the table intact and do not alter its layout.</p>"
    "<h3>Condition column</h3>"
    "<p>Each cell holds a condition name. Names must be unique regardless of lettercase, so "
    "<code>blinded</code> and <code>Blinded</code> are the same name. The casing used in the table "
    "is the casing shown on token tooltips.</p>"
    "<p>Invalid names are corrected instead of discarded:</p>"
    "<ul><li>Vertical pipes <code>|</code> and hyphens <code>-</code> are removed</li>"
    "<li>Extra whitespace is trimmed, leaving a single space between words</li>"
    "<li>Blank names become 'Condition' followed by a unique number</li>"
    "<li>Names that already exist get a unique number appended</li></ul>"
    "<p>After every save the table is sorted alphabetically by condition name, ignoring lettercase.</p>"
    "<h3>Marker column</h3>"
    "<p>Each cell links a token marker to the condition by the marker's name or tag, or is left blank. "
    "Values must match exactly, including lettercase and hyphens.</p>"
    "<h3>Description column</h3>"
    "<p>Each cell must be a bulleted or numbered list; every list item is a separate description entry. "
    "Nested lists are not supported, but simple font styles and links are kept.</p>"
)
