"""Article copy rendered from Jinja2 string templates.

Prose templates render to paragraphs separated by blank lines; list templates
render one item per line. Tree building lives in generator.py.
"""

from __future__ import annotations

from jinja2 import DictLoader, Environment, StrictUndefined

TEMPLATES: dict[str, str] = {
    # --- Introduction ---
    "intro": """\
In today's fast-paced digital world, finding the right tools can mean the difference
between struggling and thriving. {{ topic }} is one of the most searched topics this
year, and for good reason: the right choice can save you hours every week and
significantly boost your productivity, while the wrong one quietly drains your budget
and your patience.

After extensive research and hands-on testing of over a dozen options, we've compiled
this comprehensive guide to help you make an informed decision. We'll cover features,
pricing, pros and cons, and real-world use cases for each option, so you can skip the
marketing pages and get straight to what actually matters in daily use.

We narrowed the field down to {{ count }} standout {{ "option" if count == 1 else "options" }}:
{{ names }}. Each one earned its place by doing something better than the rest, whether
that is depth of features, ease of onboarding, or sheer value for money. Read on for the
details, or jump to the quick comparison if you are short on time.
""",
    "disclosure": """\
This article contains affiliate links. We may earn a commission if you make a purchase
through our links, at no extra cost to you. Our recommendations are based on our own
testing and research, and commissions never decide which products we include.
""",
    # --- Quick comparison ---
    "comparison_intro": """\
Before we dive deep into each option, here's a quick overview of what each tool excels
at. Use it as a map for the rest of the article: if one row already matches your
situation, you can head straight to that section.
""",
    "comparison_outro": """\
Keep in mind that a table can only tell part of the story. The right pick depends on how
you work, how many people will use the tool, and how much time you are willing to invest
in setting it up. The detailed reviews below cover those trade-offs one by one.
""",
    # --- Per-affiliate section ---
    "overview": """\
{{ name }} has established itself as a leading solution in this space. With a robust
feature set and competitive pricing, it's earned a loyal following among professionals
and beginners alike.
{% if rank == 0 %}
It takes our top spot because it gets the fundamentals right and then keeps going. During
testing it handled everything we threw at it, from quick everyday tasks to larger projects
with several moving parts, without ever feeling sluggish or confusing. If you only try one
tool from this list, make it this one.
{% elif rank == 1 %}
It lands as our runner up by a narrow margin. In several areas it actually matches our top
pick, and some testers preferred its cleaner layout. Where it falls slightly behind is in
the breadth of advanced options, which matters less if your needs are straightforward.
{% else %}
It is the option we recommend when cost matters most. You give up a few advanced extras,
but the core experience is solid, reliable, and pleasant to use. For individuals and
small teams that want results without a large monthly bill, it is hard to beat.
{% endif %}

What stood out most in our hands-on sessions was how quickly {{ name }} became part of the
daily routine. Within the first week the basic workflow felt natural, and by the end of
the second week we were relying on features we had not even planned to use at the start.
""",
    "features": """\
Intuitive user interface designed for efficiency, with the most common actions never more than a click or two away
Powerful automation capabilities that take repetitive chores off your plate once you set them up
Seamless integrations with popular tools, so {{ name }} fits into the stack you already use
Responsive customer support with helpful documentation, tutorials, and an active community
Regular updates with new features, guided by feedback from a large and engaged user base
""",
    "features_outro": """\
Taken together, these features make {{ name }} a dependable choice for day-to-day work. None
of them is flashy on its own, but the way they combine is what saves time in practice.
""",
    "performance": """\
In real-world use, {{ name }} stayed fast and stable throughout our testing period. Pages
and views loaded quickly, syncing between devices was reliable, and we did not run into
any data loss or serious bugs. The mobile experience is a little more limited than the
desktop version, which is common in this category, but it covers everything you need on
the go, such as quick edits, reviews, and notifications.
""",
    "pros": """\
Easy to get started with a minimal learning curve
Excellent documentation and step-by-step tutorials
Active community where questions get answered quickly
Strong performance even with larger projects
""",
    "cons": """\
Premium features require a paid subscription
Some advanced features take time to master
""",
    "pricing": """\
{{ name }} offers flexible pricing tiers to suit different needs. Most users find the
mid-tier plan offers the best value for money, balancing features with affordability.
{% if has_commission %}
New customers can usually start with a free trial or an introductory offer, which makes
it easy to test the tool properly before committing to a plan.
{% else %}
There is no special introductory deal, but the standard plans are transparent and you
can upgrade or downgrade as your needs change.
{% endif %}

Before you pay, check whether annual billing is available. Paying yearly typically cuts
the effective monthly price, and it is worth it once you are confident the tool fits
your workflow.
""",
    "who_for": """\
{% if rank == 0 %}
Choose {{ name }} if you want the most complete package and plan to use the tool every day.
{% elif rank == 1 %}
Choose {{ name }} if you want a polished experience with a good balance of features and price.
{% else %}
Choose {{ name }} if you are just starting out, working solo, or watching every dollar.
{% endif %}
It is less suitable if you need highly specialized capabilities, in which case a
dedicated niche product may serve you better.
""",
    # --- Decision guide ---
    "guide_intro": """\
Choosing the best option depends on your specific needs. Here's a quick decision guide
based on the situations we see most often among our readers:
""",
    "guide_outro": """\
If you are still unsure, ask yourself three questions. How often will you use the tool?
Who else needs access to it? What would it cost you, in time and money, to switch later?
Honest answers usually point clearly to one of the options above.

It also helps to write down the two or three tasks you most want to speed up and test
exactly those during a trial. Real tasks reveal strengths and weaknesses far faster than
feature lists or marketing comparisons ever will.
""",
    # --- Expert tips ---
    "tips_intro": """\
Based on our experience, here are some tips to maximize your success with whichever
tool you choose:
""",
    "tips": """\
Start with the free trial to test features before committing to a paid plan
Watch official tutorial videos to learn best practices from the people who built the product
Join the community forums to learn from experienced users and avoid common mistakes
Set up integrations early to streamline your workflow from the very first week
Review your usage monthly to ensure you're on the right plan and not paying for unused features
""",
    "tips_outro": """\
Most people who give up on a new tool do so in the first two weeks, usually because they
tried to configure everything at once. Begin with one simple workflow, let it become a
habit, and only then add more advanced features on top.
""",
    # --- FAQ ---
    "faq_beginners": """\
For beginners, we recommend {{ top }} due to its intuitive interface and excellent
onboarding experience. The guided setup walks you through the essentials, and the
learning resources are easy to follow even if you have never used a similar tool.
""",
    "faq_free": """\
While free alternatives exist, they often lack the advanced features and support that
make the paid options worthwhile. Most tools offer free trials or freemium tiers, so you
can start without spending anything and upgrade only when you hit the limits.
""",
    "faq_switch": """\
Yes, most modern tools support data export and import. However, switching does require
some setup time, so it's worth choosing carefully upfront. Exporting a backup of your data
every few months is a good habit regardless of which tool you pick.
""",
    "faq_teams": """\
All of the options in this guide can be used by teams, but they differ in how well they
scale. {{ top }} offers the most complete set of collaboration and permission features,
while the others work best for individuals and small groups.
""",
    # --- Conclusion ---
    "verdict_tail": """\
for most users. It offers the best combination of features, ease of use, and value for
money, and it performed consistently well across every part of our testing.
""",
    "verdict": """\
However, the "best" choice ultimately depends on your specific needs and budget. We
recommend taking advantage of free trials to find the perfect fit for your workflow,
and to revisit your choice once a year as these products evolve quickly.
""",
    "closing": """\
What's your experience with these tools? Let us know in the comments below!
""",
}

PULL_QUOTE = (
    "The best tool is the one you'll actually use consistently. "
    "Start simple, master the basics, then expand as needed."
)

FAQ_QUESTIONS = [
    ("Which option is best for beginners?", "faq_beginners"),
    ("Are there free alternatives?", "faq_free"),
    ("Can I switch between tools later?", "faq_switch"),
    ("Which option works best for teams?", "faq_teams"),
]

_env = Environment(
    loader=DictLoader(TEMPLATES),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)


def _render(template_name: str, context: dict) -> str:
    return _env.get_template(template_name).render(**context)


def render_paragraphs(template_name: str, /, **context) -> list[str]:
    """Render a prose template into paragraphs (blank-line separated)."""
    blocks = _render(template_name, context).split("\n\n")
    paragraphs = [" ".join(block.split()) for block in blocks]
    return [p for p in paragraphs if p]


def render_text(template_name: str, /, **context) -> str:
    """Render a prose template as a single paragraph of text."""
    return " ".join(render_paragraphs(template_name, **context))


def render_lines(template_name: str, /, **context) -> list[str]:
    """Render a list template, one item per non-empty line."""
    return [line.strip() for line in _render(template_name, context).splitlines() if line.strip()]
