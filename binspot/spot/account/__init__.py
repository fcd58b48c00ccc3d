"""Account queries: single orders, open and all orders, account information and trades."""