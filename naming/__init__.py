"""Describes the naming domain. Centres around the `NamingPipeline`.

Why is this hard?

- Every creative step is a large language model call and these are served
  behind apis. Two different vendors, two different wire formats.
- Availability is a guess made from public DNS. No answer is not the same
  thing as a free domain but it is close enough.
- The only invariant worth enforcing is the bounded retry loop.

Should be able to fake all of the above in tests.
"""
