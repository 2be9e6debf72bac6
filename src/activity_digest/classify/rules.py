"""Rule tables mapping domains, prompts and queries to abstract labels.

Every function here returns labels drawn from fixed vocabularies, never
fragments of the input text.
"""

from __future__ import annotations

import re

CATEGORY_RULES: dict[str, tuple[str, ...]] = {
    "work": (
        "notion.so", "linear.app", "jira.", "confluence.", "asana.com",
        "monday.com", "clickup.com", "basecamp.com", "trello.com",
        "slack.com", "teams.microsoft.com", "zoom.us", "meet.google.com",
        "calendar.google.com", "mail.google.com", "outlook.",
        "loom.com", "figma.com", "miro.com", "airtable.com", "coda.io",
        "notion.site", "docs.google.com", "sheets.google.com",
        "slides.google.com", "drive.google.com", "dropbox.com",
        "box.com", "sharepoint.com",
        "salesforce.com", "hubspot.com", "zendesk.com", "freshdesk.com", "intercom.com",
        "pagerduty.com", "datadog.com", "sentry.io", "newrelic.com",
        "calendly.com", "typeform.com", "surveymonkey.com",
        "office.com", "onedrive.com", "bitwarden.com",
    ),
    "dev": (
        "github.com", "gitlab.com", "bitbucket.org", "stackoverflow.com",
        "stackexchange.com", "npmjs.com", "pypi.org", "crates.io",
        "hub.docker.com", "vercel.com", "netlify.com", "railway.app",
        "render.com", "fly.io", "heroku.com", "aws.amazon.com",
        "console.cloud.google.com", "portal.azure.com", "cloudflare.com",
        "grafana.com", "rust-lang.org",
        "replit.com", "codepen.io", "codesandbox.io", "cursor.sh",
        "anthropic.com", "openai.com", "huggingface.co", "langchain.com",
        "docs.", "developer.", "api.",
        "jsfiddle.net", "stackblitz.com", "w3schools.com", "caniuse.com",
        "regex101.com", "jwt.io", "postman.com", "insomnia.rest",
        "bundlephobia.com", "dbdiagram.io", "devdocs.io",
        "gitbook.com", "readthedocs.io",
        "supabase.com", "planetscale.com", "neon.tech", "turso.tech", "upstash.com",
    ),
    "research": (
        "wikipedia.org", "arxiv.org", "scholar.google.com", "pubmed.ncbi.",
        "jstor.org", "researchgate.net", "semanticscholar.org",
        "perplexity.ai", "wolframalpha.com", "britannica.com",
        "medium.com", "substack.com", "lesswrong.com", "hbr.org",
        "springer.com", "nature.com", "sciencedirect.com",
        "biorxiv.org", "medrxiv.org",
        "ssrn.com", "nber.org", "paperswithcode.com",
    ),
    "news": (
        "nytimes.com", "washingtonpost.com", "theguardian.com", "bbc.",
        "reuters.com", "apnews.com", "bloomberg.com", "wsj.com",
        "ft.com", "economist.com", "theatlantic.com", "wired.com",
        "techcrunch.com", "theverge.com", "arstechnica.com",
        "news.ycombinator.com", "axios.com", "politico.com", "npr.org",
        "cnn.com", "foxnews.com", "nbcnews.com", "cbsnews.com", "msnbc.com",
        "vice.com", "vox.com", "huffpost.com", "newsweek.com",
        "thehill.com", "propublica.org", "pbs.org",
    ),
    "social": (
        "twitter.com", "x.com", "reddit.com", "linkedin.com",
        "facebook.com", "instagram.com", "threads.net", "mastodon.",
        "discord.com", "telegram.org", "whatsapp.com", "messenger.com",
        "bluesky.", "bsky.app",
        "tumblr.com", "pinterest.com", "snapchat.com", "bereal.com",
        "quora.com", "producthunt.com", "nextdoor.com", "flipboard.com",
        "dev.to", "hashnode.com",
    ),
    "media": (
        "youtube.com", "netflix.com", "spotify.com", "twitch.tv",
        "hulu.com", "disneyplus.com", "hbomax.com", "max.com",
        "primevideo.com", "soundcloud.com", "vimeo.com", "tiktok.com",
        "podcasts.apple.com",
        "peacocktv.com", "paramountplus.com", "crunchyroll.com", "funimation.com",
        "sling.com", "fubo.tv", "directv.com", "plex.tv",
        "espn.com", "nfl.com", "nba.com", "mlb.com",
        "bandcamp.com", "tidal.com", "deezer.com", "pandora.com", "iheartradio.com",
        "audible.com", "dailymotion.com",
    ),
    "shopping": (
        "amazon.com", "ebay.com", "etsy.com", "shopify.com",
        "bestbuy.com", "walmart.com", "target.com", "costco.com",
        "newegg.com", "bhphotovideo.com",
        "wayfair.com", "homedepot.com", "lowes.com", "ikea.com", "overstock.com",
        "macys.com", "nordstrom.com", "gap.com", "oldnavy.com",
        "hm.com", "zara.com", "uniqlo.com", "asos.com", "revolve.com",
        "zappos.com", "footlocker.com", "nike.com", "adidas.com",
        "aliexpress.com", "temu.com", "wish.com", "shein.com",
        "chewy.com", "petsmart.com", "petco.com",
        "adorama.com", "staples.com", "officedepot.com", "microcenter.com",
        "gamestop.com", "autozone.com",
    ),
    "finance": (
        "chase.com", "bankofamerica.com", "wellsfargo.com", "citibank.com",
        "schwab.com", "fidelity.com", "vanguard.com", "robinhood.com",
        "coinbase.com", "kraken.com", "mint.com", "ynab.com",
        "turbotax.com", "hrblock.com", "paypal.com", "stripe.com",
        "venmo.com", "cashapp.com",
        "capitalone.com", "discover.com", "americanexpress.com",
        "sofi.com", "chime.com", "wise.com", "revolut.com",
        "etrade.com", "wealthfront.com", "betterment.com", "acorns.com",
        "nerdwallet.com", "bankrate.com", "creditkarma.com",
    ),
    "ai_tools": (
        "claude.ai", "chat.openai.com", "chatgpt.com", "gemini.google.com",
        "copilot.microsoft.com",
        "poe.com", "character.ai", "midjourney.com", "runway.ml",
        "elevenlabs.io", "replicate.com",
        "mistral.ai", "cohere.com", "together.ai", "groq.com", "ollama.com",
        "lmsys.org", "pi.ai", "you.com", "phind.com", "aider.chat",
        "v0.dev", "bolt.new", "tabnine.com", "codeium.com", "sourcegraph.com",
    ),
    "personal": (
        "health.", "myfitnesspal.com", "strava.com", "garmin.com",
        "whoop.com", "oura.com", "calm.com", "headspace.com",
        "fitbit.com", "noom.com", "peloton.com", "cronometer.com",
        "loseit.com", "alltrails.com", "beachbody.com",
        "goodreads.com", "ancestry.com", "23andme.com",
        "insighttimer.com", "wakingup.com", "tenpercent.com",
        "habitica.com", "stickk.com",
    ),
    "education": (
        "coursera.org", "edx.org", "udemy.com", "skillshare.com",
        "pluralsight.com", "udacity.com",
        "khanacademy.org", "duolingo.com", "brilliant.org",
        "mit.edu", "stanford.edu", "harvard.edu",
        "canvas.", "blackboard.", "moodle.", "instructure.com",
        "chegg.com", "quizlet.com",
        "leetcode.com", "hackerrank.com", "codecademy.com",
        "freecodecamp.org", "theodinproject.com",
        "ted.com", "futurelearn.com", "openculture.com",
        "datacamp.com", "deeplearning.ai", "fast.ai",
        "coursehero.com", "desmos.com", "code.org",
    ),
    "gaming": (
        "store.steampowered.com", "epicgames.com",
        "gog.com", "itch.io", "humblebundle.com",
        "xbox.com", "playstation.com", "nintendo.com",
        "battlenet.com", "ea.com", "ubisoft.com",
        "igdb.com", "ign.com", "gamespot.com",
        "pcgamer.com", "kotaku.com", "polygon.com",
        "speedrun.com", "howlongtobeat.com",
        "minecraft.net", "mojang.com",
        "leagueoflegends.com", "valorant.com", "blizzard.com",
        "rockstargames.com", "activision.com",
        "nexusmods.com", "protondb.com", "curseforge.com",
        "g2a.com", "fanatical.com",
    ),
    "writing": (
        "grammarly.com", "hemingwayapp.com", "prowritingaid.com",
        "overleaf.com", "ghost.org", "nanowrimo.org", "ulysses.app",
        "reedsy.com", "atticus.io", "wattpad.com", "fictionpress.com",
        "750words.com", "draft.app", "novelcrafter.com", "dabble.me",
    ),
    "pkm": (
        "obsidian.md", "logseq.com", "roamresearch.com",
        "capacities.io", "tana.inc", "mem.ai", "reflect.app",
        "readwise.io", "raindrop.io", "instapaper.com",
        "hypothesis.is", "zettelkasten.de",
        "workflowy.com", "craft.do", "anytype.io", "heptabase.com",
        "supernotes.app",
    ),
}

CATEGORY_LABELS: dict[str, str] = {
    "work": "Work",
    "dev": "Dev & Engineering",
    "research": "Research",
    "news": "News",
    "social": "Social",
    "media": "Media & Entertainment",
    "shopping": "Shopping",
    "finance": "Finance",
    "ai_tools": "AI Tools",
    "personal": "Personal",
    "education": "Education",
    "gaming": "Gaming",
    "writing": "Writing",
    "pkm": "PKM & Notes",
    "sensitive": "Filtered",
    "other": "Other",
}

CATEGORY_TO_ACTIVITY: dict[str, str] = {
    "dev": "implementation",
    "work": "admin",
    "research": "research",
    "news": "browsing",
    "social": "communication",
    "media": "browsing",
    "shopping": "browsing",
    "finance": "admin",
    "ai_tools": "implementation",
    "personal": "browsing",
    "education": "learning",
    "gaming": "browsing",
    "writing": "writing",
    "pkm": "writing",
    "sensitive": "unknown",
    "other": "unknown",
}

# First match wins.
TASK_TYPE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\b(fix|debug|why\s+(does|is|isn'?t)|not\s+work|error|crash|bug|broken|fail)\b", re.I), "debugging"),
    (re.compile(r"\b(review|check|audit|is\s+this\s+(correct|right|good)|critique|look\s+at)\b", re.I), "review"),
    (re.compile(r"\b(explain|describe|what\s+is|what\s+are|how\s+does|help\s+me\s+understand|teach|clarify)\b", re.I), "learning"),
    (re.compile(r"\b(design|plan|should\s+i|what\s+approach|architecture|structure)\b", re.I), "architecture"),
    (re.compile(r"\b(add|build|create|implement|write|refactor|update|generate|set\s+up|migrate)\b", re.I), "implementation"),
]

TASK_TO_ACTIVITY: dict[str, str] = {
    "implementation": "implementation",
    "debugging": "debugging",
    "review": "implementation",
    "learning": "learning",
    "architecture": "planning",
}

TOPIC_VOCABULARY: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\b(oauth|auth|jwt|token|session|login|password|credential|permission|role|access)\b", re.I), "authentication"),
    (re.compile(r"\b(react|vue|angular|svelte|next\.?js|remix|component|hook|state|props|jsx|tsx)\b", re.I), "frontend"),
    (re.compile(r"\b(api|rest|graphql|endpoint|route|http|request|response|fetch|axios|webhook)\b", re.I), "api-design"),
    (re.compile(r"\b(docker|kubernetes|k8s|terraform|aws|cloud|deploy|ci|cd|pipeline|helm|ecs)\b", re.I), "infrastructure"),
    (re.compile(r"\b(test|tests|spec|mock|pytest|vitest|jest|coverage|unit|integration|e2e|assert|expect)\b", re.I), "testing"),
    (re.compile(r"\b(sql|database|postgres|mysql|sqlite|query|schema|migration|index|orm|prisma)\b", re.I), "database"),
    (re.compile(r"\b(typescript|type|interface|generic|infer|narrowing|zod|validation)\b", re.I), "typescript"),
    (re.compile(r"\b(performance|optimize|slow|latency|memory|cache|cdn|bundle|profil\w*)\b", re.I), "performance"),
    (re.compile(r"\b(security|vuln\w*|xss|csrf|injection|sanitize|escape|encrypt|hash)\b", re.I), "security"),
    (re.compile(r"\b(git|commit|branch|merge|rebase|conflict|pr|pull\s+request)\b", re.I), "version-control"),
    (re.compile(r"\b(algorithm|data\s+structure|complexity|sort|tree|graph|dynamic\s+programming)\b", re.I), "algorithms"),
    (re.compile(r"\b(machine\s+learning|llm|ai|model|embedding|vector|neural|gpt|claude|anthropic)\b", re.I), "ai-ml"),
    (re.compile(r"\b(refactor|clean|solid|pattern|architecture|design|monolith|microservice|domain)\b", re.I), "software-design"),
    (re.compile(r"\b(error|exception|crash|stack\s+trace|debug|log|monitor|alert|incident)\b", re.I), "debugging"),
    (re.compile(r"\b(doc|docs|readme|comment|jsdoc|docstring|openapi|swagger|markdown)\b", re.I), "documentation"),
]

SEARCH_INTENT_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\bvs\b|\bcompare\b|\bdifference\b|\bversus\b|\balternative", re.I), "compare"),
    (re.compile(r"\bhow\s+to\b|\bexample\b|\btutorial\b|\bguide\b", re.I), "implement"),
    (re.compile(r"\bbest\b|\breview\b|\brecommend\b|\bpros\b|\bcons\b", re.I), "evaluate"),
    (re.compile(r"\bwhat\s+is\b|\bwho\s+is\b|\bdefin", re.I), "read"),
    (re.compile(r"\berror\b|\bfix\b|\bdebug\b|\bnot\s+work", re.I), "troubleshoot"),
    (re.compile(r"\bconfig\b|\bsetup\b|\binstall\b|\benable\b|\bconfigure\b", re.I), "configure"),
]

SHELL_INFRA_COMMANDS = frozenset({
    "docker", "kubectl", "terraform", "helm", "ssh", "scp", "aws", "gcloud", "az",
    "ansible", "systemctl", "brew", "apt", "apt-get",
})

MAX_TOPICS = 3


def categorize_domain(domain: str) -> str:
    domain = domain.lower()
    if domain.startswith("www."):
        domain = domain[4:]
    if not domain:
        return "other"
    for category, patterns in CATEGORY_RULES.items():
        if any(p in domain for p in patterns):
            return category
    return "other"


def classify_prompt_task(text: str) -> str:
    text = text[:200]
    for pattern, task_type in TASK_TYPE_PATTERNS:
        if pattern.search(text):
            return task_type
    return "implementation"


def prompt_topics(text: str, limit: int = MAX_TOPICS) -> list[str]:
    """Vocabulary labels matched by `text`, in vocabulary order."""
    topics: list[str] = []
    for pattern, label in TOPIC_VOCABULARY:
        if label not in topics and pattern.search(text):
            topics.append(label)
            if len(topics) >= limit:
                break
    return topics


def search_intent(text: str) -> str:
    for pattern, intent in SEARCH_INTENT_PATTERNS:
        if pattern.search(text):
            return intent
    return "explore"


def shell_activity(command: str) -> str:
    parts = command.split()
    base = parts[0] if parts else ""
    if base in {"sudo", "env"} and len(parts) > 1:
        base = parts[1]
    if base in SHELL_INFRA_COMMANDS:
        return "infrastructure"
    return "implementation"
