"""Built-in domain lists for each sensitivity category.

Entries are hosts, or a host with a path prefix (``reddit.com/r/tifu``).
"""

from __future__ import annotations

from dataclasses import dataclass

from activity_digest.config import SensitivityCategory


@dataclass(frozen=True)
class CategoryInfo:
    label: str
    description: str
    domains: tuple[str, ...]


ADULT_DOMAINS = (
    "pornhub.com", "xvideos.com", "xnxx.com", "xhamster.com",
    "redtube.com", "youporn.com", "tube8.com", "spankbang.com",
    "brazzers.com", "bangbros.com", "realitykings.com", "naughtyamerica.com",
    "mofos.com", "digitalplayground.com", "wicked.com", "evilangel.com",
    "kink.com", "chaturbate.com", "myfreecams.com", "livejasmin.com",
    "cam4.com", "stripchat.com", "bongacams.com", "camsoda.com",
    "onlyfans.com", "fansly.com", "manyvids.com", "clips4sale.com",
    "porntrex.com", "eporner.com", "beeg.com", "hclips.com",
    "txxx.com", "vporn.com", "drtuber.com", "sunporno.com",
    "tnaflix.com", "empflix.com", "pornone.com", "4tube.com",
    "porn.com", "sex.com", "xxxbunker.com", "fuq.com",
    "thumbzilla.com", "pornpics.com", "hentaihaven.xxx", "nhentai.net",
    "hanime.tv", "rule34.xxx", "e-hentai.org", "gelbooru.com",
    "danbooru.donmai.us", "literotica.com", "asstr.org",
    "imagefap.com", "motherless.com", "heavy-r.com",
    "backpage.com", "bedpage.com", "skipthegames.com",
    "eros.com", "tryst.link", "slixa.com",
)

GAMBLING_DOMAINS = (
    "draftkings.com", "fanduel.com", "betmgm.com", "caesars.com",
    "bet365.com", "williamhill.com", "paddypower.com", "betfair.com",
    "unibet.com", "888.com", "pokerstars.com", "partypoker.com",
    "bovada.lv", "betonline.ag", "mybookie.ag", "betway.com",
    "betrivers.com", "pointsbet.com", "twinspires.com", "xbet.ag",
    "stake.com", "roobet.com", "bc.game", "rollbit.com",
    "lottery.com", "jackpocket.com", "lottoland.com",
    "oddschecker.com", "actionnetwork.com", "covers.com",
    "askgamblers.com", "casinoguru.com", "wizard-of-odds.com",
    "prizepicks.com", "underdog.io", "sleeper.com",
    "bitcasino.io", "fortunejack.com", "cloudbet.com",
)

DATING_DOMAINS = (
    "tinder.com", "bumble.com", "hinge.co", "match.com",
    "okcupid.com", "plentyoffish.com", "pof.com", "zoosk.com",
    "eharmony.com", "elitesingles.com", "silversingles.com",
    "ourtime.com", "christianmingle.com", "jdate.com",
    "coffee-meets-bagel.com", "happn.com", "badoo.com",
    "meetme.com", "tagged.com", "skout.com",
    "grindr.com", "scruff.com", "jackd.com", "hornet.com",
    "feeld.co", "3fun.co", "pureapp.com",
    "seeking.com", "seekingarrangement.com", "sugardaddymeet.com",
    "tantan.com", "momo.com", "lovoo.com", "meetic.com",
    "farmersonly.com", "theleague.com", "raya.com",
)

HEALTH_DOMAINS = (
    "mycharthealth.com", "mychart.com", "patient.info",
    "webmd.com", "mayoclinic.org", "healthline.com", "medlineplus.gov",
    "nhs.uk", "drugs.com", "rxlist.com", "goodrx.com",
    "teladoc.com", "amwell.com", "mdlive.com", "doctorondemand.com",
    "hims.com", "forhers.com", "cerebral.com", "brightside.com",
    "betterhelp.com", "talkspace.com", "regain.us",
    "psychologytoday.com", "nami.org", "samhsa.gov",
    "crisistextline.org", "suicidepreventionlifeline.org",
    "healthcare.gov", "anthem.com", "cigna.com", "aetna.com",
    "unitedhealthcare.com", "humana.com", "bcbs.com",
    "kaiserpermanente.org", "oscar.com",
    "babycenter.com", "whattoexpect.com", "thebump.com",
    "plannedparenthood.org", "fertilityiq.com",
    "cvs.com/pharmacy", "walgreens.com/pharmacy", "capsule.com",
    "alto.com", "pillpack.com",
    "questdiagnostics.com", "labcorp.com",
    "cancer.org", "diabetes.org", "heart.org",
    "alz.org", "epilepsy.com",
)

FINANCE_DOMAINS = (
    "chase.com", "bankofamerica.com", "wellsfargo.com", "citi.com",
    "usbank.com", "pnc.com", "tdbank.com", "capitalone.com",
    "ally.com", "discover.com", "marcus.com", "synchrony.com",
    "sofi.com", "chime.com", "current.com", "varo.com",
    "schwab.com", "fidelity.com", "vanguard.com", "etrade.com",
    "tdameritrade.com", "robinhood.com", "webull.com", "m1finance.com",
    "interactivebrokers.com", "tastyworks.com", "tradestation.com",
    "coinbase.com", "binance.com", "kraken.com", "gemini.com",
    "crypto.com", "ftx.com", "kucoin.com", "bitfinex.com",
    "bitstamp.net", "gate.io",
    "turbotax.com", "hrblock.com", "taxact.com", "freetaxusa.com",
    "irs.gov", "ssa.gov",
    "creditkarma.com", "experian.com", "equifax.com", "transunion.com",
    "annualcreditreport.com", "myfico.com",
    "paypal.com", "venmo.com", "zelle.com", "cashapp.com",
    "stripe.com/dashboard", "plaid.com",
    "geico.com", "progressive.com", "statefarm.com", "allstate.com",
    "lemonade.com", "policygenius.com",
    "lendingtree.com", "rocket.com", "better.com", "sofi.com/loans",
    "upstart.com", "prosper.com", "lendingclub.com",
)

DRUGS_DOMAINS = (
    "leafly.com", "weedmaps.com", "dutchie.com", "iheartjane.com",
    "eaze.com", "stiiizy.com", "curaleaf.com", "trulieve.com",
    "crescolabs.com", "greenthumbindustries.com",
    "erowid.org", "bluelight.org", "drugs-forum.com",
    "psychonautwiki.org", "tripsit.me",
    "juul.com", "njoy.com", "vaporfi.com", "elementvape.com",
    "nootropicsdepot.com", "ceretropic.com",
)

WEAPONS_DOMAINS = (
    "budsgunshop.com", "palmettostatearmory.com", "brownells.com",
    "midwayusa.com", "cheaperthandirt.com", "ammo.com",
    "luckygunner.com", "sgammo.com", "natchezss.com",
    "grabagun.com", "gunbroker.com", "armslist.com",
    "bladehq.com", "knifecenter.com", "benchmade.com",
    "smith-wesson.com", "glock.com", "sigsauer.com",
    "ruger.com", "beretta.com", "colt.com", "remington.com",
    "springfield-armory.com", "danieldefense.com",
    "nra.org", "ar15.com", "thefirearmblog.com",
)

PIRACY_DOMAINS = (
    "thepiratebay.org", "1337x.to", "rarbg.to", "nyaa.si",
    "yts.mx", "torrentgalaxy.to", "limetorrents.info",
    "torrentz2.eu", "eztv.re", "rutracker.org",
    "fitgirl-repacks.site", "dodi-repacks.site",
    "fmovies.to", "123movies.la", "putlocker.vip",
    "solarmovie.pe", "gomovies.sx", "soap2day.to",
    "bflix.to", "flixtor.to", "hdtoday.tv",
    "crackstreams.is", "sportsurge.net", "buffstreams.tv",
    "totalsportek.com", "firstrowsports.eu",
    "gogoanime.tel", "9anime.to", "animixplay.to",
    "zoro.to", "animepahe.com",
    "getintopc.com", "filecr.com",
    "mega.nz", "rapidgator.net", "uploaded.net", "nitroflare.com",
)

VPN_PROXY_DOMAINS = (
    "nordvpn.com", "expressvpn.com", "surfshark.com", "cyberghostvpn.com",
    "protonvpn.com", "privateinternetaccess.com", "mullvad.net",
    "windscribe.com", "hide.me", "purevpn.com", "ipvanish.com",
    "strongvpn.com", "tunnelbear.com", "hotspotshield.com",
    "avast.com/secureline-vpn", "norton.com/products/norton-secure-vpn",
    "hidemyass.com", "kproxy.com", "proxysite.com",
    "whoer.net", "browserleaks.com",
    "nextdns.io", "controld.com",
)

JOB_SEARCH_DOMAINS = (
    "linkedin.com/jobs", "indeed.com", "glassdoor.com",
    "ziprecruiter.com", "monster.com", "careerbuilder.com",
    "dice.com", "hired.com", "angel.co/jobs", "wellfound.com",
    "levels.fyi", "blind.com", "teamblind.com",
    "upwork.com", "fiverr.com", "toptal.com", "freelancer.com",
    "weworkremotely.com", "remoteok.com", "flexjobs.com",
    "remote.co", "workingnomads.co",
    "salary.com", "payscale.com", "comparably.com",
    "leetcode.com", "hackerrank.com", "interviewbit.com",
    "usajobs.gov",
)

SOCIAL_PERSONAL_DOMAINS = (
    "reddit.com/r/tifu", "reddit.com/r/confessions",
    "reddit.com/r/relationship_advice", "reddit.com/r/amitheasshole",
    "reddit.com/r/offmychest", "reddit.com/r/unpopularopinion",
    "whisper.sh", "postsecret.com",
    "tmz.com", "perezhilton.com", "dlisted.com",
    "deuxmoi.com", "crazydaysandnights.net",
    "craigslist.org/personals",
    "co-star.com", "astro.com", "kasamba.com", "keen.com",
    "california-psychics.com",
    "yikyak.com",
)

# Email click-tracker redirect hops.
TRACKER_DOMAINS = (
    "ct.sendgrid.net", "list-manage.com", "mandrillapp.com", "mailchi.mp",
    "rs6.net", "hubspotemail.net", "hsms06.com", "hs-email.click",
    "exacttarget.com", "exct.net", "pardot.com",
    "acemlna.com", "acemlnb.com", "acemlnc.com", "acemlnd.com", "activehosted.com",
    "click.marketo.com", "mktoweb.com", "createsend.com", "klaviyomail.com",
    "click.braze.com", "link.braze.com", "click.iterable.com", "links.iterable.com",
    "convertkit-mail.com", "convertkit-mail2.com", "convertkit-mail3.com",
    "pstmrk.it", "link.e.sailthru.com", "messaginganalytics.athena.io",
)

# OAuth / SSO intermediary pages.
AUTH_DOMAINS = (
    "accounts.google.com",
    "login.microsoftonline.com", "login.live.com", "login.windows.net",
    "account.microsoft.com",
    "appleid.apple.com", "idmsa.apple.com",
    "login.salesforce.com",
    "github.com/login/oauth",
    "myidentity.platform.athenahealth.com", "identity.athenahealth.com",
    "okta.com", "auth0.com",
    "sso.google.com",
)

CATEGORY_REGISTRY: dict[SensitivityCategory, CategoryInfo] = {
    SensitivityCategory.ADULT: CategoryInfo(
        "Adult Content", "Adult entertainment, explicit content, escort services", ADULT_DOMAINS),
    SensitivityCategory.GAMBLING: CategoryInfo(
        "Gambling & Betting", "Online casinos, sportsbooks, lotteries, crypto gambling", GAMBLING_DOMAINS),
    SensitivityCategory.DATING: CategoryInfo(
        "Dating & Relationships", "Dating apps, matchmaking, hookup platforms", DATING_DOMAINS),
    SensitivityCategory.HEALTH: CategoryInfo(
        "Health & Medical", "Patient portals, telehealth, prescriptions, mental health, insurance",
        HEALTH_DOMAINS),
    SensitivityCategory.FINANCE: CategoryInfo(
        "Banking & Finance", "Banks, brokerages, crypto exchanges, tax, credit, insurance, loans",
        FINANCE_DOMAINS),
    SensitivityCategory.DRUGS: CategoryInfo(
        "Drugs & Substances", "Cannabis dispensaries, drug info, vaping, nootropics", DRUGS_DOMAINS),
    SensitivityCategory.WEAPONS: CategoryInfo(
        "Weapons & Firearms", "Gun retailers, ammunition, tactical gear, firearms forums", WEAPONS_DOMAINS),
    SensitivityCategory.PIRACY: CategoryInfo(
        "Piracy & Torrents", "Torrent sites, pirated streaming, cracked software", PIRACY_DOMAINS),
    SensitivityCategory.VPN_PROXY: CategoryInfo(
        "VPN & Proxy", "VPN services, proxy tools, DNS privacy", VPN_PROXY_DOMAINS),
    SensitivityCategory.JOB_SEARCH: CategoryInfo(
        "Job Search", "Job boards, salary info, interview prep, freelance platforms", JOB_SEARCH_DOMAINS),
    SensitivityCategory.SOCIAL_PERSONAL: CategoryInfo(
        "Personal & Sensitive Social", "Confessional forums, gossip, astrology, personal ads",
        SOCIAL_PERSONAL_DOMAINS),
    SensitivityCategory.TRACKER: CategoryInfo(
        "Email Trackers", "Email marketing click-tracker redirects", TRACKER_DOMAINS),
    SensitivityCategory.AUTH: CategoryInfo(
        "Auth / SSO Flows", "OAuth consent screens and identity-provider login pages", AUTH_DOMAINS),
    SensitivityCategory.CUSTOM: CategoryInfo("Custom", "Your personal exclusion list", ()),
}


def category_label(category: SensitivityCategory) -> str:
    return CATEGORY_REGISTRY[category].label


def builtin_domain_count() -> int:
    return sum(len(info.domains) for info in CATEGORY_REGISTRY.values())
