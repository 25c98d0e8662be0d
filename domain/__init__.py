"""Describes the Recipe Remix domain. Centres around the current `Recipe`.

What is there to it?

- Recipes come from TheMealDB. We never own them, we only show them.
- Remixes come from a language model behind an api.
- The only thing we keep is a list of saved recipe names.
- One invariant worth enforcing: a slow response must not replace a newer one.

Both apis can be faked with an httpx transport, so the whole domain runs
offline in the tests.
"""
