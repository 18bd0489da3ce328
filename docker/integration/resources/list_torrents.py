from qbittorrentapi import Client

client = Client()
client.auth_log_in()
for torrent in client.torrents_info():
    print(f'{torrent.hash} {torrent.state} [{torrent.category}] ({torrent.tags}) {torrent.name}')
