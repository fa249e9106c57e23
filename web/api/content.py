"""Static copy for the landing, contact and disclaimer pages."""

SITE_NAME = "TournamentPro"

NAV_LINKS = [
    {"path": "/", "label": "Home"},
    {"path": "/bgmi", "label": "BGMI"},
    {"path": "/freefire", "label": "Free Fire"},
    {"path": "/contact", "label": "Contact"},
    {"path": "/disclaimer", "label": "Disclaimer"},
]

LANDING_FEATURES = [
    {
        "title": "Professional Tournaments",
        "description": "Competitive BGMI and Free Fire tournaments with fixed prize pools",
    },
    {
        "title": "Multiple Formats",
        "description": "Solo, Duo and Squad brackets for every skill level",
    },
    {
        "title": "Instant Registration",
        "description": "Register in minutes and attach your payment screenshot",
    },
    {
        "title": "Fair Play",
        "description": "Every registration is reviewed and rules are enforced for all players",
    },
]

CONTACT_INFO = [
    {"title": "Email Us", "content": "support@tournamentpro.com", "link": "mailto:support@tournamentpro.com"},
    {"title": "Call Us", "content": "+91 98765 43210", "link": "tel:+919876543210"},
    {"title": "Visit Us", "content": "Mumbai, Maharashtra, India", "link": None},
    {"title": "Working Hours", "content": "Mon-Sat: 10:00 AM - 8:00 PM", "link": None},
]

FAQ = [
    {
        "question": "How do I register for a tournament?",
        "answer": "Open the BGMI or Free Fire page, pick Solo, Duo or Squad, fill in the form, "
        "attach your payment screenshot and submit. You are contacted on WhatsApp once approved.",
    },
    {
        "question": "What payment methods do you accept?",
        "answer": "UPI. Upload a screenshot of the payment together with its transaction ID.",
    },
    {
        "question": "When will I receive tournament details?",
        "answer": "After approval, the room ID and password are sent on WhatsApp 30 minutes before the start.",
    },
    {
        "question": "How are prizes distributed?",
        "answer": "By UPI transfer within 24-48 hours of the match, after the winning screenshot is verified.",
    },
    {
        "question": "Can I cancel my registration?",
        "answer": "Cancellations must be requested on WhatsApp at least 2 hours before the tournament starts.",
    },
]

DISCLAIMER_SECTIONS = [
    {
        "title": "General Disclaimer",
        "content": [
            "Information on this site is provided in good faith for general purposes only, without warranty of any kind.",
            "Use of the site and reliance on its information is at your own risk.",
        ],
    },
    {
        "title": "Tournament Participation",
        "content": [
            "Participants must be 18 or older, or have parental or guardian consent.",
            "Players using hacks, cheats or third-party tools that give an unfair advantage are disqualified.",
            "Schedules, prize pools and rules may change; registered players are notified on WhatsApp.",
            "We are not responsible for connectivity, device or game server problems during a match.",
        ],
    },
    {
        "title": "Payment and Prizes",
        "content": [
            "Entry fees are non-refundable once a tournament has started.",
            "Prizes are paid after the winning screenshot is verified, within 24-48 hours.",
            "Prizes may be withheld when rule violations or fraud are detected.",
            "Only pay through the payment details shown on the registration form.",
        ],
    },
    {
        "title": "Intellectual Property",
        "content": [
            "BGMI is a trademark of Krafton, Inc. Free Fire is a trademark of Garena International.",
            "This is an independent organizer, not affiliated with the game developers.",
        ],
    },
    {
        "title": "Limitation of Liability",
        "content": [
            "Our total liability for any claim is limited to the registration fee you paid.",
        ],
    },
]

DISCLAIMER_POINTS = [
    {"title": "Fair Play Policy", "description": "Zero tolerance for cheating. Violations result in a permanent ban."},
    {"title": "Privacy", "description": "Registration data is used only to run tournaments."},
    {"title": "Dispute Resolution", "description": "Admin decisions on rule violations are final."},
]
