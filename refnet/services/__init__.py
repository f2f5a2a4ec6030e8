"""
Services package.

- ledger: store operations consumed by deposit processing
- referral: chain walking, commissions, links, reporting
- team_bonus: team volume bonus evaluation
- deposit: deposit processing and reward distribution
- registration_service: user registration
"""
