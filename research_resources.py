# research_resources.py
"""
Reference material offered to researchers, with a simple search.
"""

CATEGORIES = [
    {'id': 'all', 'name': 'All Resources'},
    {'id': 'standards', 'name': 'Standards & Guidelines'},
    {'id': 'methods', 'name': 'Methods & Protocols'},
    {'id': 'tools', 'name': 'Tools & Templates'},
    {'id': 'databases', 'name': 'Databases'},
    {'id': 'collaboration', 'name': 'Collaboration'},
]

RESOURCES = [
    {
        'id': 1,
        'title': "WHO Guidelines for Drinking Water Quality",
        'type': "Guidelines",
        'category': 'standards',
        'description': "Comprehensive guidelines for water quality standards and heavy metal contamination limits.",
        'url': "https://www.who.int/publications/i/item/9789241549950",
        'downloadable': True,
        'tags': ["WHO", "standards", "heavy metals", "guidelines"],
    },
    {
        'id': 2,
        'title': "EPA Heavy Metal Analysis Methods",
        'type': "Methodology",
        'category': 'methods',
        'description': "Standard methods for heavy metal analysis in water samples using various analytical techniques.",
        'url': "https://www.epa.gov/hw-sw846",
        'downloadable': True,
        'tags': ["EPA", "analysis", "methods", "heavy metals"],
    },
    {
        'id': 3,
        'title': "HMPI Calculation Framework",
        'type': "Tool",
        'category': 'tools',
        'description': "Mathematical framework and calculation methods for Heavy Metal Pollution Index.",
        'url': "/resources/hmpi-framework.pdf",
        'downloadable': True,
        'tags': ["HMPI", "calculation", "framework", "pollution index"],
    },
    {
        'id': 4,
        'title': "Water Quality Research Database",
        'type': "Database",
        'category': 'databases',
        'description': "Global database of water quality research papers and case studies.",
        'url': "https://waterresearch.net",
        'downloadable': False,
        'tags': ["database", "research", "papers", "case studies"],
    },
    {
        'id': 5,
        'title': "Statistical Analysis Templates",
        'type': "Template",
        'category': 'tools',
        'description': "R and Python templates for statistical analysis of water quality data.",
        'url': "/resources/statistical-templates.zip",
        'downloadable': True,
        'tags': ["statistics", "R", "Python", "templates"],
    },
    {
        'id': 6,
        'title': "International Water Quality Standards",
        'type': "Reference",
        'category': 'standards',
        'description': "Comparison of water quality standards across different countries and organizations.",
        'url': "/resources/international-standards.pdf",
        'downloadable': True,
        'tags': ["standards", "international", "comparison", "reference"],
    },
    {
        'id': 7,
        'title': "Collaborative Research Network",
        'type': "Network",
        'category': 'collaboration',
        'description': "Platform for connecting with water quality researchers worldwide.",
        'url': "https://waterresearch-network.org",
        'downloadable': False,
        'tags': ["collaboration", "network", "researchers", "community"],
    },
    {
        'id': 8,
        'title': "Sample Collection Protocols",
        'type': "Protocol",
        'category': 'methods',
        'description': "Standardized protocols for water sample collection and preservation.",
        'url': "/resources/collection-protocols.pdf",
        'downloadable': True,
        'tags': ["protocols", "sampling", "collection", "preservation"],
    },
]


def search_resources(term=None, category='all'):
    """Filters resources by category and a case-insensitive term over title, description and tags."""
    needle = (term or '').strip().lower()
    results = []
    for resource in RESOURCES:
        if category and category != 'all' and resource['category'] != category:
            continue
        if needle:
            haystack = [resource['title'], resource['description']] + resource['tags']
            if not any(needle in text.lower() for text in haystack):
                continue
        results.append(resource)
    return results
