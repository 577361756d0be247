"""CoinCraft 어드벤처 모드 게임 코어"""
