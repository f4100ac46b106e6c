"""
Reference quotes loaded into the catalog at startup.
"""

SAMPLE_QUOTES = [
    {
        "text": "The only way to do great work is to love what you do.",
        "author": "Steve Jobs",
        "category": "motivation",
    },
    {
        "text": "Life is what happens to you while you're busy making other plans.",
        "author": "John Lennon",
        "category": "life",
    },
    {
        "text": "The future belongs to those who believe in the beauty of their dreams.",
        "author": "Eleanor Roosevelt",
        "category": "dreams",
    },
    {
        "text": "It is during our darkest moments that we must focus to see the light.",
        "author": "Aristotle",
        "category": "inspiration",
    },
    {
        "text": "Success is not final, failure is not fatal: it is the courage to continue that counts.",
        "author": "Winston Churchill",
        "category": "success",
    },
    {
        "text": "The only impossible journey is the one you never begin.",
        "author": "Tony Robbins",
        "category": "motivation",
    },
    {
        "text": "In the end, we will remember not the words of our enemies, but the silence of our friends.",
        "author": "Martin Luther King Jr.",
        "category": "friendship",
    },
    {
        "text": "Be yourself; everyone else is already taken.",
        "author": "Oscar Wilde",
        "category": "authenticity",
    },
]
