from qbittorrentapi import Client

client = Client()
client.auth_log_in()
hashes = [torrent.hash for torrent in client.torrents_info()]
if hashes:
    client.torrents_delete(delete_files=False, torrent_hashes=hashes)
    print(f'Removed {len(hashes)} torrents successfully')
else:
    print('No torrents are loaded in client')
