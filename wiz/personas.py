"""Persona factory — builds concrete actors for one batch request.

Names rotate deterministically by the actor's global index (so actor 57 is
the same person whichever batch produced it); age within the cohort range and
personality come from the supplied ``random.Random``.
"""

import asyncio
import random

from wiz.errors import InvalidBatchRequestError
from wiz.orchestrator import CancellationToken
from wiz.state import BatchRequest, GeneratedActor, Persona

ACTOR_NODE_TYPE = "brainNode"

FIRST_NAMES: dict[str, list[str]] = {
    "western": ["Emma", "Liam", "Olivia", "Noah", "Ava", "Ethan", "Sophia", "Mason", "Isabella", "William",
                "Mia", "James", "Charlotte", "Benjamin", "Amelia", "Lucas", "Harper", "Henry", "Evelyn",
                "Alexander", "Abigail", "Michael", "Emily", "Daniel", "Elizabeth", "Matthew", "Sofia",
                "David", "Victoria", "Joseph"],
    "asian": ["Wei", "Yuki", "Hiroshi", "Mei", "Kenji", "Sakura", "Chen", "Aiko", "Jin", "Hana", "Ryu",
              "Yuna", "Tao", "Sora", "Min", "Kaori", "Jing", "Akira", "Ling", "Haruto", "Yuki", "Takeshi",
              "Naomi", "Kazuki", "Hikaru", "Ren", "Ayumi", "Kenta", "Mika", "Shinji"],
    "latino": ["Sofia", "Mateo", "Valentina", "Santiago", "Camila", "Sebastian", "Lucia", "Diego", "Mariana",
               "Carlos", "Isabella", "Miguel", "Gabriela", "Alejandro", "Elena", "Andres", "Paula", "Juan",
               "Ana", "Luis", "Carmen", "Rafael", "Rosa", "Antonio", "Maria", "Fernando", "Adriana",
               "Ricardo", "Patricia", "Eduardo"],
    "african": ["Amara", "Kwame", "Zara", "Kofi", "Nia", "Jabari", "Aisha", "Malik", "Imani", "Darius",
                "Aaliyah", "Jamal", "Kira", "Marcus", "Zuri", "Xavier", "Keisha", "Andre", "Fatima", "Omar",
                "Ayo", "Chidi", "Adaeze", "Obinna", "Chioma", "Emeka", "Adanna", "Ngozi", "Ikenna",
                "Chiamaka"],
    "indian": ["Priya", "Arjun", "Ananya", "Rohan", "Diya", "Vikram", "Neha", "Aditya", "Riya", "Rahul",
               "Kavya", "Sanjay", "Ishita", "Amit", "Pooja", "Karan", "Shreya", "Dev", "Anisha", "Raj",
               "Sunita", "Vivek", "Meera", "Deepak", "Sneha", "Nikhil", "Tara", "Ashok", "Lakshmi", "Suresh"],
    "middleEastern": ["Layla", "Omar", "Sara", "Ahmed", "Noor", "Hassan", "Fatima", "Yusuf", "Mariam", "Ali",
                      "Leila", "Karim", "Zahra", "Tariq", "Hana", "Faris", "Amina", "Samir", "Yasmin",
                      "Khalid", "Rania", "Mustafa", "Dina", "Ibrahim", "Salma", "Rashid", "Lina", "Walid",
                      "Mona", "Ziad"],
}

# Weighted towards "Dr."
PROFESSIONAL_TITLES = ["Dr.", "Dr.", "Dr.", "Prof.", "Dr.", "PhD"]

SPECIALIZATIONS: dict[str, list[str]] = {
    "scientist": ["Neuroscience", "Physics", "Chemistry", "Biology", "Computer Science", "Mathematics",
                  "Genetics", "Astronomy", "Ecology", "Biochemistry", "Materials Science", "Quantum Physics",
                  "Microbiology", "Oceanography", "Climatology"],
    "researcher": ["AI Research", "Data Science", "Cognitive Science", "Social Psychology",
                   "Behavioral Economics", "Epidemiology", "Genomics", "Robotics", "Machine Learning",
                   "Computational Biology", "Neurotechnology", "Drug Discovery", "Climate Modeling",
                   "Quantum Computing", "Bioinformatics"],
    "doctor": ["Cardiology", "Neurology", "Oncology", "Pediatrics", "Surgery", "Internal Medicine",
               "Psychiatry", "Dermatology", "Radiology", "Anesthesiology", "Emergency Medicine", "Pathology",
               "Geriatrics", "Pulmonology", "Gastroenterology"],
    "lawyer": ["Corporate Law", "Criminal Law", "Intellectual Property", "Environmental Law",
               "Constitutional Law", "Tax Law", "Immigration Law", "Family Law", "Real Estate Law",
               "Employment Law", "International Law", "Healthcare Law", "Securities Law", "Antitrust Law",
               "Civil Rights Law"],
    "engineer": ["Software Engineering", "Mechanical Engineering", "Electrical Engineering",
                 "Civil Engineering", "Chemical Engineering", "Aerospace Engineering",
                 "Biomedical Engineering", "Environmental Engineering", "Nuclear Engineering",
                 "Robotics Engineering", "AI Engineering", "Systems Engineering", "Structural Engineering",
                 "Marine Engineering", "Automotive Engineering"],
    "analyst": ["Data Analytics", "Financial Analysis", "Market Research", "Business Intelligence",
                "Risk Analysis", "Security Analysis", "Policy Analysis", "Systems Analysis",
                "Behavioral Analytics", "Competitive Intelligence", "Performance Analytics",
                "Predictive Modeling", "Trend Analysis", "Consumer Insights", "Operational Analysis"],
}
DEFAULT_SPECIALIZATIONS = ["General Practice", "Applied Research", "Field Study", "Theoretical Work",
                           "Experimental Design", "Case Study", "Comparative Analysis",
                           "Longitudinal Research", "Cross-sectional Study", "Meta-analysis",
                           "Qualitative Research", "Quantitative Research", "Mixed Methods",
                           "Action Research", "Ethnography"]

FANTASY_NAMES: dict[str, list[str]] = {
    "alien": ["Zyx-7", "Klatuu", "Xorbian", "Qwerty-9", "Nexar", "Theta-12", "Zephyx", "Kronax", "Vex-88",
              "Zillox", "Proxima", "Altair-6", "Rigel-X", "Vega-9", "Sirius-7", "Andromeda-3", "Orion-12",
              "Centauri-5", "Polaris-8", "Arcturus-2"],
    "robot": ["Unit-742", "R2-X9", "ARIA-3", "NEXUS-7", "PROTO-12", "ECHO-5", "ZETA-8", "OMEGA-1", "DELTA-6",
              "SIGMA-4", "TAU-9", "KAPPA-2", "THETA-7", "LAMBDA-3", "MU-11", "NU-8", "XI-5", "OMICRON-6",
              "PI-4", "RHO-9"],
    "medieval": ["Sir Galahad", "Lady Morgana", "Baron Blackwood", "Dame Elara", "Lord Thorncastle",
                 "Lady Seraphina", "Sir Cedric", "Countess Ravenna", "Duke Alaric", "Princess Isolde",
                 "Sir Gareth", "Lady Rowena", "Earl Godric", "Baroness Lyanna", "Sir Percival",
                 "Lady Guinevere", "Lord Aldric", "Dame Beatrix", "Baron Oswald", "Countess Cordelia"],
    "wizard": ["Zephyrus the Wise", "Morgath Shadowcaster", "Elindra Starweaver", "Theron the Ancient",
               "Seraphel Moonwhisper", "Aldric Flameheart", "Lunaria Crystalmind", "Oberon Stormcaller",
               "Celestia Nightveil", "Malachar the Grey", "Isadora Frostweave", "Thandril Runekeeper",
               "Avalon Mistwalker", "Xander Spellbinder", "Rowena Sunshadow", "Merrick Thornwood",
               "Sylvara Windchant", "Balthazar Darkholm", "Mirabel Lightbringer", "Caelum Voidwatcher"],
    "vampire": ["Count Dracul", "Lady Nyx", "Baron Sanguis", "Countess Crimson", "Lord Tenebris",
                "Duchess Nocturne", "Prince Vladislav", "Lady Scarlet", "Baron Nightshade", "Countess Vesper",
                "Duke Morbius", "Lady Raven", "Count Sanguine", "Baroness Midnight", "Lord Erebus",
                "Lady Carmilla", "Prince Lazarus", "Countess Lilith", "Baron Graves", "Duchess Obsidian"],
    "pirate": ["Captain Blackbeard", "Admiral Scarlet", "First Mate Storm", "Quartermaster Drake",
               "Navigator Tide", "Captain Redhand", "Commodore Shadow", "Captain Ironside", "Admiral Tempest",
               "First Mate Bones", "Captain Cutlass", "Navigator Compass", "Quartermaster Gold",
               "Captain Savage", "Admiral Kraken", "First Mate Silver", "Captain Phantom", "Navigator Star",
               "Quartermaster Rum", "Captain Viper"],
    "ninja": ["Shadow Kaze", "Silent Ryu", "Phantom Hiro", "Ghost Akira", "Void Takeshi", "Eclipse Yuki",
              "Mist Kenji", "Serpent Shinji", "Storm Hayato", "Blade Masashi", "Smoke Tetsu", "Night Kaito",
              "Thunder Daichi", "Ice Yukio", "Fire Kazuma", "Wind Haruki", "Earth Sora", "Water Minato",
              "Lightning Raiden", "Steel Goro"],
    "superhero": ["Captain Valor", "The Phantom", "Crimson Guardian", "Silver Shadow", "Thunder Strike",
                  "Night Wing", "Cosmic Ray", "Steel Titan", "Blaze Runner", "Ice Queen", "Storm Chaser",
                  "Mind Master", "Power Surge", "Gravity Force", "Speed Demon", "Shield Bearer",
                  "Fire Phoenix", "Aqua Marine", "Earth Shaker", "Wind Walker"],
}
DEFAULT_FANTASY_NAMES = ["Entity Alpha", "Spectre Beta", "Wraith Gamma", "Phantom Delta", "Spirit Epsilon",
                         "Ghost Zeta", "Shadow Eta", "Shade Theta", "Specter Iota", "Revenant Kappa",
                         "Apparition Lambda", "Vision Mu", "Presence Nu", "Essence Xi", "Being Omicron",
                         "Form Pi", "Shape Rho", "Figure Sigma", "Outline Tau", "Silhouette Upsilon"]

# Nouns that borrow another category's name pool.
FANTASY_ALIASES: list[tuple[tuple[str, ...], str]] = [
    (("android", "cyborg", "ai"), "robot"),
    (("knight", "lord", "lady", "baron"), "medieval"),
    (("mage", "sorcerer", "witch"), "wizard"),
    (("samurai", "assassin"), "ninja"),
    (("hero", "villain", "mutant"), "superhero"),
]

DEMOGRAPHICS: dict[str, dict] = {
    "gen-z": {"label": "Gen Z", "age_range": (13, 24)},
    "millennial": {"label": "Millennial", "age_range": (25, 40)},
    "gen-x": {"label": "Gen X", "age_range": (41, 56)},
    "boomer": {"label": "Boomer", "age_range": (57, 75)},
    "senior": {"label": "Senior", "age_range": (75, 95)},
}

PERSONALITY_TYPES = ["analytical", "creative", "social", "driver", "amiable", "expressive", "skeptical",
                     "enthusiastic", "methodical", "intuitive"]

OCCUPATION_TRAITS: dict[str, list[list[str]]] = {
    "chef": [
        ["classically trained", "innovative", "perfectionist", "flavor-obsessed"],
        ["comfort food lover", "experimental", "presentation-focused", "seasonal ingredients advocate"],
        ["fusion enthusiast", "traditionalist", "spice lover", "health-conscious cook"],
        ["pastry specialist", "grill master", "sauce expert", "farm-to-table advocate"],
    ],
    "teacher": [
        ["patient", "encouraging", "strict but fair", "innovative pedagogy"],
        ["student-centered", "lecture-style", "hands-on learner advocate", "technology integrator"],
        ["nurturing", "challenging", "supportive", "assessment-focused"],
        ["collaborative", "independent study advocate", "project-based", "differentiated instruction"],
    ],
    "critic": [
        ["harsh but fair", "encouraging", "detail-oriented", "big-picture focused"],
        ["traditionalist", "avant-garde appreciator", "populist", "elitist"],
        ["verbose", "concise", "analytical", "emotional responder"],
        ["constructive", "blunt", "diplomatic", "provocative"],
    ],
    "student": [
        ["diligent", "perfectionist", "anxious about grades", "thorough"],
        ["balanced", "occasionally distracted", "decent effort", "social learner"],
        ["unconventional answers", "artistic", "sometimes off-topic", "imaginative"],
        ["needs extra time", "guesses often", "distracted", "uncertain"],
    ],
}
DEFAULT_TRAITS = [
    ["analytical", "thorough", "detail-oriented", "systematic"],
    ["creative", "innovative", "outside-the-box thinker", "visionary"],
    ["practical", "results-oriented", "efficient", "pragmatic"],
    ["collaborative", "team player", "communicative", "supportive"],
]

BEHAVIOR_TEMPLATES: dict[str, str] = {
    "rating": "{name} will {verb} the content on a scale of 1-10, providing detailed justification "
              "based on their {traits} perspective{spec}.",
    "reaction": "{name} will watch/experience the content and provide their genuine reaction, "
                "influenced by their {traits} nature{spec}.",
    "analysis": "{name} will analyze the material using their {traits} approach{spec}, identifying key "
                "points and providing thoughtful recommendations.",
    "testing": "{name} will attempt to answer the questions, with performance influenced by their "
               "{traits} characteristics{spec}.",
    "creation": "{name} will create/generate content based on the input, reflecting their unique "
                "{traits} style{spec}.",
    "voting": "{name} will make their selection based on their {traits} preferences{spec}, "
              "explaining their choice.",
    "debate": "{name} will present their perspective on the topic, drawing from their {traits} "
              "viewpoint{spec}.",
    "custom": "{name} will process the input as a {noun}, applying their {traits} approach{spec}.",
}


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def human_name(index: int) -> tuple[str, str]:
    """Return ``(first_name, cultural_background)``, rotating backgrounds first."""
    backgrounds = list(FIRST_NAMES)
    background = backgrounds[index % len(backgrounds)]
    names = FIRST_NAMES[background]
    return names[(index // len(backgrounds)) % len(names)], background


def fantasy_name(agent_noun: str, index: int) -> str:
    noun = agent_noun.lower()
    for category, names in FANTASY_NAMES.items():
        if category in noun:
            return names[index % len(names)]
    for keywords, category in FANTASY_ALIASES:
        if any(k in noun for k in keywords):
            names = FANTASY_NAMES[category]
            return names[index % len(names)]
    return DEFAULT_FANTASY_NAMES[index % len(DEFAULT_FANTASY_NAMES)]


def specialization_for(agent_noun: str, index: int) -> str:
    noun = agent_noun.lower()
    for profession, specs in SPECIALIZATIONS.items():
        if profession in noun:
            return specs[index % len(specs)]
    return DEFAULT_SPECIALIZATIONS[index % len(DEFAULT_SPECIALIZATIONS)]


def occupation_traits(agent_noun: str, index: int) -> list[str]:
    noun = agent_noun.lower()
    trait_sets = DEFAULT_TRAITS
    for occupation, sets in OCCUPATION_TRAITS.items():
        if occupation in noun:
            trait_sets = sets
            break
    return trait_sets[index % len(trait_sets)][:2]


def behavior_for(
    display_name: str,
    agent_noun: str,
    task_type: str,
    task_verb: str,
    traits: list[str],
    specialization: str | None = None,
) -> str:
    template = BEHAVIOR_TEMPLATES.get(task_type, BEHAVIOR_TEMPLATES["custom"])
    return template.format(
        name=display_name,
        noun=agent_noun,
        verb=task_verb,
        traits=" and ".join(traits),
        spec=f" with expertise in {specialization}" if specialization else "",
    )


def generate_actor(global_index: int, request: BatchRequest, rng: random.Random) -> GeneratedActor:
    """Build the actor at ``global_index`` (0-based across the whole run)."""
    agent_noun = request["agentNoun"]
    naming_style = request["namingStyle"]

    cohorts = request.get("demographicMix") or list(DEMOGRAPHICS)
    demographic = DEMOGRAPHICS.get(cohorts[global_index % len(cohorts)], DEMOGRAPHICS["millennial"])
    age = rng.randint(*demographic["age_range"])
    personality = rng.choice(PERSONALITY_TYPES)
    traits = occupation_traits(agent_noun, global_index)

    title = specialization = None
    if naming_style == "professional":
        first_name, background = human_name(global_index)
        title = PROFESSIONAL_TITLES[global_index % len(PROFESSIONAL_TITLES)]
        specialization = specialization_for(agent_noun, global_index)
        display_name = f"{title} {first_name}"
    elif naming_style == "fantasy":
        display_name = first_name = fantasy_name(agent_noun, global_index)
        background = "fantasy"
    elif naming_style == "numbered":
        display_name = first_name = f"{_capitalize(agent_noun)}-{global_index + 1:04d}"
        background = "synthetic"
    else:
        first_name, background = human_name(global_index)
        display_name = first_name

    persona: Persona = {
        "name": first_name,
        "displayName": display_name,
        "culturalBackground": background,
        "ageGroup": demographic["label"],
        "age": age,
        "personality": personality,
        "traits": traits,
    }
    if specialization:
        persona["specialization"] = specialization
    if title:
        persona["title"] = title

    label = f"{_capitalize(agent_noun)} {global_index + 1} - {display_name}"
    return {
        "type": ACTOR_NODE_TYPE,
        "label": label,
        "agentNoun": agent_noun,
        "persona": persona,
        "behavior": behavior_for(
            display_name, agent_noun, request["taskType"], request["taskVerb"], traits, specialization
        ),
    }


def batch_bounds(request: BatchRequest) -> tuple[int, int]:
    """Return the ``[start, end)`` global index range covered by a batch request."""
    batch_number, batch_size, total = request["batchNumber"], request["batchSize"], request["totalCount"]
    if batch_number < 0 or batch_size <= 0 or total <= 0:
        raise InvalidBatchRequestError("Invalid batch parameters")
    start = batch_number * batch_size
    return start, min(start + batch_size, total)


async def generate_batch_actors(
    request: BatchRequest,
    rng: random.Random | None = None,
    token: CancellationToken | None = None,
) -> list[GeneratedActor]:
    """Generate every actor of one batch; empty once past ``totalCount``."""
    rng = rng or random.Random()
    start, end = batch_bounds(request)

    actors = []
    for global_index in range(start, end):
        if token is not None:
            token.raise_if_cancelled()
        actors.append(generate_actor(global_index, request, rng))
        await asyncio.sleep(0)
    return actors
