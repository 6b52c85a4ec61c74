"""
Site Constants for the portfolio

Static literals describing the site: metadata, page paths, social links,
the tag taxonomy, the author profile shown in the sidebar and the About
page copy. Values that can be overridden from the environment (contact
endpoint, analytics id, Disqus script) live in ``portfolio.config``.
"""

SITE = {
    "path_prefix": "",
    "site_url": "https://ahmed-komsan.github.io",
    "site_title": "Ahmed Komsan",
    "site_description": "Logbook of a software developer",
    "author": "Ahmed Komsan",
    "posts_for_archive_page": 3,
    "default_language": "en",
    "pages": {
        "home": "/",
        "blog": "blog",
        "contact": "contact",
        "resume": "resume",
        "tag": "tags",
    },
    "social": {
        "github": "https://github.com/Ahmed-Komsan",
        "facebook": "https://www.facebook.com/ahmed.komsan2013",
        "twitter": "https://twitter.com/ahmed_komsan12",
        "instagram": "https://www.instagram.com/ahmed.komsan1/",
        "rss": "/rss.xml",
    },
    "tags": {
        "UIKit": {
            "name": "UIKit",
            "description": "UIKit framework provides the required infrastructure for your iOS or tvOS apps.",
            "color": "#43ace0",
        },
        "IOS": {
            "name": "IOS",
            "description": (
                "iOS is a mobile operating system created and developed by Apple Inc. exclusively "
                "for its hardware. It is the operating system that powers many of the company's "
                "mobile devices, including the iPhone and iPod Touch"
            ),
            "color": "#43ace0",
        },
        "Swift": {
            "name": "Swift",
            "description": (
                "Swift is a powerful and intuitive programming language for iOS, iPadOS, macOS, "
                "tvOS, and watchOS."
            ),
            "color": "#43ace0",
        },
    },
    "profile": {
        "first_name": "Ahmed",
        "last_name": "Komsan",
        "badge": "IOS Software Engineer",
        "location": "Cairo, Egypt",
        "email": "ahmedkomsan0@gmail.com",
    },
}

# Header navigation: (label, page key)
NAV_ITEMS = [
    ("About", "home"),
    ("Contact", "contact"),
    ("Blog", "blog"),
    ("Tags", "tag"),
    ("Resume", "resume"),
]

# Colour used for tags that posts reference but the taxonomy does not define
FALLBACK_TAG_COLOR = "#999999"

# Sidebar icon order: (social key, icon name)
SIDEBAR_SOCIAL_ICONS = [
    ("linkedin", "linkedin"),
    ("twitter", "twitter"),
    ("github", "github"),
    ("instagram", "instagram"),
    ("stackoverflow", "stack-overflow"),
]

# ── About page ────────────────────────────────────────────────────────────────

ABOUT_PARAGRAPHS = [
    (
        "👨‍💻&ensp; Hi! 👋 &nbsp;, I'm <b>Ahmed Komsan</b> an IOS Software engineer Doing mobile "
        "applications development for +4 years working with different languages like C, C++, "
        "Objective-C, Swift and Java. following MVVM, MVVM-C, MVC methods of organizing code. "
        "I’m truly passionate about my work and always eager to learn new skills, enthusiastically "
        "grabbing onto learning any other programming languages, frameworks or principles and "
        "develop new software , apps and products."
    ),
    (
        "🎓&ensp; Obtained my bachelor's degree in Computer Science from the cairo University in "
        "Egypt ( Faculty of Computers and Information ) focusing on Software Engineering."
    ),
    (
        "✨&ensp; This blog mostly covers my programming experience venturing into the world of "
        "iOS and Swift and my small previous dealing with C/C++. You can also find some rants "
        "here, because I do not like when stuff breaks."
    ),
    (
        "🌃 &ensp; I think the turning point in my career goes back to my second year in college "
        "when I decided to join my colleagues in the programming competitions and focusing on "
        "the algorithms and competitive programming."
    ),
    (
        "🤾🏾&ensp; When i'm not working, i love Reading, Playing and Watching Football and blog "
        "about IOS Development."
    ),
]

ABOUT_TILES = [
    {
        "img": "location.png",
        "alt": "location image",
        "text_h4": "Born and bought up in",
        "text_h3": "Cairo, Egypt",
        "height": 60,
        "width": None,
    },
    {
        "img": "coffee.png",
        "alt": "coffee image",
        "text_h4": "Love Coffee",
        "text_h3": "Coffee + Me = Happiness",
        "height": None,
        "width": None,
    },
    {
        "img": "graduation.png",
        "alt": "graduation image",
        "text_h4": "Pursued B.Tech in",
        "text_h3": "Computer Science",
        "height": 60,
        "width": 60,
    },
]

ABOUT_KEYWORDS = ["Ahmed", "Komsan", "IOS developer", "Swift", "Objective-c", "UIKit"]

CONTACT_DESCRIPTION = (
    "Hello folks Ahmed Komsan here. You can contact me through the contact form on this page. "
    "Please feel free to contact me, just remember Komsan is always open to talk about mobile "
    "technologies especially IOS development. Find me on github - Ahmed-Komsan"
)

CONTACT_KEYWORDS = ["Ahmed", "Komsan", "IOS developer", "Swift", "Objective-c", "UIKit", "SwiftUI", "technology"]

CONTACT_SUCCESS_MESSAGE = "Thank you for your kind response 🙌. Will get back to you."
CONTACT_FAILURE_MESSAGE = "Sorry, your message could not be delivered. Please try again later."
